"""
Name: Record Helpers

Responsibilities:
  - Identity stamping shared by both record stores (id, createdAt, updatedAt)
  - Shallow patch merge with protected identity fields
  - Field-name validation for dynamic lookups
  - Text coercion that mirrors PostgreSQL's ->> operator

Collaborators:
  - json_record_store.JsonRecordStore
  - postgres_record_store.PostgresRecordStore

Notes:
  - Timestamps are ISO-8601 UTC with millisecond precision and a "Z" suffix
"""

from __future__ import annotations

import json
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Tuple
from uuid import uuid4

from ...crosscutting.exceptions import UnsafeFieldNameError

PROTECTED_FIELDS = ("id", "createdAt", "updatedAt")

SAFE_FIELD_PATTERN = re.compile(r"^[A-Za-z0-9_]+$")


def now_iso() -> str:
    return (
        datetime.now(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


def validate_field_name(field: str) -> str:
    """
    R: Reject field names that are not plain identifiers.

    Raises:
        UnsafeFieldNameError: Before any query is built
    """
    if not isinstance(field, str) or not SAFE_FIELD_PATTERN.match(field):
        raise UnsafeFieldNameError(f"Unsafe field name: {field!r}")
    return field


def new_record(data: Mapping[str, Any]) -> Dict[str, Any]:
    """R: Stamp a new record; keeps a caller-supplied id."""
    timestamp = now_iso()
    row = {key: value for key, value in data.items() if value is not None}
    row["id"] = str(data.get("id") or uuid4())
    row["createdAt"] = timestamp
    row["updatedAt"] = timestamp
    return row


def split_patch(patch: Mapping[str, Any]) -> Tuple[Dict[str, Any], List[str]]:
    """
    R: Separate a patch into fields to set and fields to remove.

    Protected identity fields are dropped; None marks a removal.
    """
    to_set: Dict[str, Any] = {}
    to_remove: List[str] = []
    for key, value in patch.items():
        if key in PROTECTED_FIELDS:
            continue
        if value is None:
            to_remove.append(key)
        else:
            to_set[key] = value
    return to_set, to_remove


def merge_patch(current: Mapping[str, Any], patch: Mapping[str, Any]) -> Dict[str, Any]:
    to_set, to_remove = split_patch(patch)
    merged = {key: value for key, value in current.items() if key not in to_remove}
    merged.update(to_set)
    merged["id"] = current["id"]
    merged["createdAt"] = current["createdAt"]
    merged["updatedAt"] = now_iso()
    return merged


def as_text(value: Any) -> Optional[str]:
    """R: Same text a jsonb ->> lookup would yield for value."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if hasattr(value, "value") and isinstance(value.value, str):
        return value.value
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(", ", ": "))
    return str(value)
