"""
Name: Assignments Service

Responsibilities:
  - Lookups by shift, by user and by a set of shifts
  - Status changes and bulk removal for a shift

Collaborators:
  - BaseCrudService
  - RecordStore field lookups (indexed on Postgres, scans on files)
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from ...crosscutting.logger import logger
from ...domain.entities import Assignment, AssignmentStatus
from .base_crud import BaseCrudService


class AssignmentsService(BaseCrudService[Assignment]):
    entity_type = Assignment

    def for_shift(self, shift_id: str) -> List[Assignment]:
        return self._to_entities(self.store.find_by_field("shiftId", shift_id))

    def for_shift_ids(self, shift_ids: Iterable[str]) -> List[Assignment]:
        ids = list(shift_ids)
        if not ids:
            return []
        return self._to_entities(self.store.find_by_field_in("shiftId", ids))

    def for_user(self, user_id: str) -> List[Assignment]:
        return self._to_entities(self.store.find_by_field("userId", user_id))

    def set_status(
        self, assignment_id: str, status: AssignmentStatus | str
    ) -> Optional[Assignment]:
        return self.update(assignment_id, {"status": status})

    def delete_for_shift(self, shift_id: str) -> int:
        """R: Delete every assignment of a shift; returns how many were removed."""
        deleted = 0
        for assignment in self.for_shift(shift_id):
            if self.delete(assignment.id):
                deleted += 1
        if deleted:
            logger.info(
                "Assignments deleted for shift",
                extra={"shift_id": shift_id, "count": deleted},
            )
        return deleted
