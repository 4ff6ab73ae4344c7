"""
Name: JSON File Record Store

Responsibilities:
  - Implement RecordStore over one JSON array file per resource
  - Route every mutation through JsonTableFile.mutate (queue + lock + replace)
  - Answer lookups by full scan + in-memory filter

Collaborators:
  - infrastructure.storage.JsonTableFile
  - records: identity stamping, patch merge, field validation

Constraints:
  - Reads never take the lock
  - Filtering compares the ->> text form so results match PostgresRecordStore
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional

from ...domain.repositories import Payload
from ..storage.json_table import JsonTableFile
from .records import as_text, merge_patch, new_record, validate_field_name


class JsonRecordStore:
    """R: File-backed implementation of RecordStore."""

    def __init__(self, resource: str, table: JsonTableFile):
        self.resource = resource
        self.table = table

    @classmethod
    def in_directory(cls, resource: str, data_dir: Path, **table_options) -> "JsonRecordStore":
        """R: Store for "<data_dir>/<resource>.json"."""
        return cls(resource, JsonTableFile(Path(data_dir) / f"{resource}.json", **table_options))

    def load_all(self) -> List[Payload]:
        return self.table.read()

    def find_by_id(self, record_id: str) -> Optional[Payload]:
        return next((row for row in self.load_all() if row.get("id") == record_id), None)

    def create(self, data: Mapping[str, Any]) -> Payload:
        def mutator(rows):
            row = new_record(data)
            return rows + [row], row

        return self.table.mutate(mutator)

    def update(self, record_id: str, patch: Mapping[str, Any]) -> Optional[Payload]:
        def mutator(rows):
            for index, row in enumerate(rows):
                if row.get("id") == record_id:
                    merged = merge_patch(row, patch)
                    next_rows = list(rows)
                    next_rows[index] = merged
                    return next_rows, merged
            return rows, None

        return self.table.mutate(mutator)

    def delete(self, record_id: str) -> bool:
        def mutator(rows):
            remaining = [row for row in rows if row.get("id") != record_id]
            return remaining, len(remaining) != len(rows)

        return self.table.mutate(mutator)

    def find_by_field(self, field: str, value: Any) -> List[Payload]:
        validate_field_name(field)
        wanted = as_text(value)
        if wanted is None:
            return []
        return [row for row in self.load_all() if as_text(row.get(field)) == wanted]

    def find_by_field_in(self, field: str, values: Iterable[Any]) -> List[Payload]:
        validate_field_name(field)
        wanted = {text for text in (as_text(value) for value in values) if text is not None}
        if not wanted:
            return []
        return [row for row in self.load_all() if as_text(row.get(field)) in wanted]

    def find_by_field_range(self, field: str, start: Any, end: Any) -> List[Payload]:
        validate_field_name(field)
        low, high = as_text(start), as_text(end)
        out = []
        for row in self.load_all():
            text = as_text(row.get(field))
            if text is not None and low <= text <= high:
                out.append(row)
        return out

    def find_by_ids(self, record_ids: Iterable[str]) -> List[Payload]:
        wanted = {str(record_id) for record_id in record_ids}
        if not wanted:
            return []
        return [row for row in self.load_all() if row.get("id") in wanted]
