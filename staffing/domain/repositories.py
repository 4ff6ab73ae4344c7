"""
Name: Domain Repository Interfaces

Responsibilities:
  - Define the record store contract shared by every storage backend
  - Keep services independent of JSON files vs. PostgreSQL

Collaborators:
  - Implementations in infrastructure.repositories
    (JsonRecordStore, PostgresRecordStore)
  - application.services (typed facades over a RecordStore)

Constraints:
  - Pure interfaces (Protocol), no implementation
  - Records travel as plain camelCase dicts (the persisted payload shape)
  - Query helpers return records in unspecified order; callers sort

Notes:
  - Not-found is signalled with None/False, never an exception
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol

Payload = Dict[str, Any]


class RecordStore(Protocol):
    """
    R: Durable keyed storage of one homogeneous resource.

    Implementations must provide:
      - CRUD with identity stamping (id/createdAt/updatedAt)
      - Shallow-merge updates that never touch id/createdAt
      - Equality, IN and inclusive range lookups on top-level fields
    """

    resource: str

    def load_all(self) -> List[Payload]:
        """R: Every record of the resource."""
        ...

    def find_by_id(self, record_id: str) -> Optional[Payload]:
        ...

    def create(self, data: Mapping[str, Any]) -> Payload:
        """
        R: Persist a new record.

        Args:
            data: Complete record fields; "id" is optional and generated if absent

        Returns:
            Stored record including id/createdAt/updatedAt
        """
        ...

    def update(self, record_id: str, patch: Mapping[str, Any]) -> Optional[Payload]:
        """
        R: Merge patch over the current record.

        Each patch key replaces the stored field wholesale; a None value
        removes the field. id/createdAt are never overwritten; updatedAt
        is refreshed.

        Returns:
            Updated record, or None if record_id does not exist
        """
        ...

    def delete(self, record_id: str) -> bool:
        """R: Hard delete. True if a record was removed."""
        ...

    def find_by_field(self, field: str, value: Any) -> List[Payload]:
        ...

    def find_by_field_in(self, field: str, values: Iterable[Any]) -> List[Payload]:
        ...

    def find_by_field_range(self, field: str, start: Any, end: Any) -> List[Payload]:
        """R: Records with start <= record[field] <= end (string comparison)."""
        ...

    def find_by_ids(self, record_ids: Iterable[str]) -> List[Payload]:
        ...
