"""
Name: JSON Table File Tests

Responsibilities:
  - Lazy materialization of missing files
  - Corrupt content surfaces as CorruptDataError
  - Atomic replace leaves no temp or lock files behind
"""

import json

import pytest

from staffing.crosscutting.exceptions import CorruptDataError, LockTimeoutError
from staffing.infrastructure.storage import JsonTableFile, WriteSerializer, dump_rows


@pytest.fixture
def table(tmp_path):
    return JsonTableFile(
        tmp_path / "shifts.json", serializer=WriteSerializer(), lock_retry_delay=0.001
    )


@pytest.mark.unit
class TestJsonTableFile:
    def test_missing_file_reads_empty_and_is_created(self, table):
        assert table.read() == []
        assert table.path.read_text(encoding="utf-8") == "[]\n"

    def test_missing_directory_is_created(self, tmp_path):
        table = JsonTableFile(tmp_path / "nested" / "users.json", serializer=WriteSerializer())

        assert table.read() == []
        assert table.path.exists()

    def test_write_is_pretty_printed_with_unicode(self, table):
        rows = [{"id": "1", "name": "Hlavní"}]

        table.write(rows)

        content = table.path.read_text(encoding="utf-8")
        assert content == dump_rows(rows)
        assert '  {\n    "id": "1",' in content
        assert "Hlavní" in content
        assert json.loads(content) == rows

    def test_mutate_returns_mutator_result(self, table):
        table.write([{"id": "a"}])

        result = table.mutate(lambda rows: (rows + [{"id": "b"}], len(rows) + 1))

        assert result == 2
        assert [row["id"] for row in table.read()] == ["a", "b"]

    def test_no_temp_or_lock_files_remain(self, table):
        table.write([{"id": "1"}])
        table.mutate(lambda rows: (rows, None))

        leftovers = sorted(p.name for p in table.path.parent.iterdir())
        assert leftovers == ["shifts.json"]

    def test_failing_mutator_leaves_file_untouched_and_releases_lock(self, table):
        table.write([{"id": "1"}])

        def fail(rows):
            raise RuntimeError("mutator failed")

        with pytest.raises(RuntimeError):
            table.mutate(fail)

        assert table.read() == [{"id": "1"}]
        assert not table.lock_path.exists()

    def test_non_array_payload_is_corrupt(self, table):
        table.path.write_text('{"id": "1"}', encoding="utf-8")

        with pytest.raises(CorruptDataError, match="Expected array"):
            table.read()

    def test_invalid_json_is_corrupt(self, table):
        table.path.write_text("[{", encoding="utf-8")

        with pytest.raises(CorruptDataError):
            table.read()

    def test_corrupt_file_is_not_overwritten_by_mutate(self, table):
        table.path.write_text('"oops"', encoding="utf-8")

        with pytest.raises(CorruptDataError):
            table.mutate(lambda rows: (rows + [{"id": "x"}], None))

        assert table.path.read_text(encoding="utf-8") == '"oops"'

    def test_held_lock_times_out(self, tmp_path):
        table = JsonTableFile(
            tmp_path / "events.json",
            serializer=WriteSerializer(),
            lock_retries=3,
            lock_retry_delay=0.001,
        )
        table.lock_path.write_text("")

        with pytest.raises(LockTimeoutError):
            table.write([])

    def test_lock_path_is_sibling_of_data_file(self, table):
        assert table.lock_path.name == "shifts.json.lock"
        assert table.lock_path.parent == table.path.parent
