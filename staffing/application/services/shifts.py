"""
Name: Shifts Service

Responsibilities:
  - Date / date-range / id-set lookups with explicit ordering
  - Worker sign-up (idempotent) and un-assignment
  - Occupancy counts and cascading delete (assignments first)

Collaborators:
  - AssignmentsService
  - application.aggregation: ordering keys and occupancy arithmetic

Constraints:
  - Storage order is never relied on; every list is sorted here
  - Sign-up is idempotent per (shift, user) within one serialized caller;
    two concurrent sign-ups for the same pair can still both insert
  - delete() always removes the shift's assignments first, so the generic
    resource registry cascades too
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from ...crosscutting.exceptions import ShiftNotFoundError
from ...crosscutting.logger import logger
from ...domain.entities import (
    Assignment,
    AssignmentStatus,
    Shift,
    StaffRole,
    User,
)
from ..aggregation import count_occupancy, day_order_key, range_order_key
from ..schedule_results import Occupancy
from .assignments import AssignmentsService
from .base_crud import BaseCrudService


class ShiftsService(BaseCrudService[Shift]):
    entity_type = Shift

    def __init__(self, store, assignments: AssignmentsService):
        super().__init__(store)
        self.assignments = assignments

    # =========================================================
    # Lookups
    # =========================================================
    def for_date(self, date: str) -> List[Shift]:
        shifts = self._to_entities(self.store.find_by_field("date", date))
        return sorted(shifts, key=day_order_key)

    def for_date_range(self, start_date: str, end_date: str) -> List[Shift]:
        shifts = self._to_entities(
            self.store.find_by_field_range("date", start_date, end_date)
        )
        return sorted(shifts, key=range_order_key)

    def for_ids(self, shift_ids: Iterable[str]) -> List[Shift]:
        ids = list(shift_ids)
        if not ids:
            return []
        return self._to_entities(self.store.find_by_ids(ids))

    def find_at(self, date: str, location_id: str) -> Optional[Shift]:
        """R: First shift on a date at a location (the event/planner upsert target)."""
        for shift in self.for_date(date):
            if shift.location_id == location_id:
                return shift
        return None

    # =========================================================
    # Staffing
    # =========================================================
    def signup(
        self,
        shift_id: str,
        user: User,
        staff_role: Optional[StaffRole | str] = None,
        force_status: Optional[AssignmentStatus | str] = None,
    ) -> Assignment:
        """
        Put a user on a shift.

        Returns the existing assignment when the user is already on the
        shift. Otherwise the status is force_status, else pending when the
        shift requires approval, else confirmed.

        Raises:
            ShiftNotFoundError: shift_id does not exist
        """
        shift = self.find_by_id(shift_id)
        if shift is None:
            raise ShiftNotFoundError(f"Shift not found: {shift_id}")

        for assignment in self.assignments.for_shift(shift_id):
            if assignment.user_id == user.id:
                return assignment

        if force_status is not None:
            status = AssignmentStatus(force_status)
        elif shift.requires_approval:
            status = AssignmentStatus.PENDING
        else:
            status = AssignmentStatus.CONFIRMED

        assignment = self.assignments.create(
            {
                "shift_id": shift_id,
                "user_id": user.id,
                "staff_role": staff_role or user.primary_staff_role,
                "status": status,
            }
        )
        logger.info(
            "Shift signup",
            extra={"shift_id": shift_id, "user_id": user.id, "status": status.value},
        )
        return assignment

    def unassign(self, shift_id: str, user_id: str) -> bool:
        for assignment in self.assignments.for_shift(shift_id):
            if assignment.user_id == user_id:
                return self.assignments.delete(assignment.id)
        return False

    def occupancy(self, shift_id: str) -> Occupancy:
        return count_occupancy(self.assignments.for_shift(shift_id))

    def delete(self, record_id: str) -> bool:
        """R: Delete a shift's assignments, then the shift."""
        self.assignments.delete_for_shift(record_id)
        deleted = super().delete(record_id)
        logger.info("Shift deleted", extra={"shift_id": record_id, "deleted": deleted})
        return deleted

    def delete_cascade(self, shift_id: str) -> bool:
        return self.delete(shift_id)
