"""
Name: Record Helper Tests

Responsibilities:
  - Identity stamping, patch splitting/merging, ->> text mirroring
"""

import re

import pytest

from staffing.crosscutting.exceptions import UnsafeFieldNameError
from staffing.domain.entities import AssignmentStatus
from staffing.infrastructure.repositories.records import (
    as_text,
    merge_patch,
    new_record,
    now_iso,
    split_patch,
    validate_field_name,
)

ISO_MS = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


@pytest.mark.unit
class TestRecordHelpers:
    def test_now_iso_has_millisecond_precision_and_z_suffix(self):
        assert ISO_MS.match(now_iso())

    def test_new_record_generates_uuid_and_drops_none(self):
        row = new_record({"name": "Bar", "notes": None})

        assert len(row["id"]) == 36
        assert "notes" not in row
        assert row["createdAt"] == row["updatedAt"]

    def test_split_patch_separates_removals_and_skips_identity(self):
        to_set, to_remove = split_patch(
            {"id": "x", "createdAt": "y", "updatedAt": "z", "date": "2024-06-01", "notes": None}
        )

        assert to_set == {"date": "2024-06-01"}
        assert to_remove == ["notes"]

    def test_merge_patch_keeps_identity(self):
        current = {"id": "1", "createdAt": "c", "updatedAt": "u", "notes": "n", "date": "d"}

        merged = merge_patch(current, {"notes": None, "date": "e", "id": "2"})

        assert merged["id"] == "1"
        assert merged["createdAt"] == "c"
        assert merged["updatedAt"] != "u"
        assert merged["date"] == "e"
        assert "notes" not in merged

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("2024-06-01", "2024-06-01"),
            (True, "true"),
            (False, "false"),
            (6, "6"),
            (AssignmentStatus.PENDING, "pending"),
            (None, None),
        ],
    )
    def test_as_text_mirrors_jsonb_text(self, value, expected):
        assert as_text(value) == expected

    def test_validate_field_name(self):
        assert validate_field_name("shift_Id9") == "shift_Id9"
        with pytest.raises(UnsafeFieldNameError):
            validate_field_name("date'--")
