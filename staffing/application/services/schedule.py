"""
Name: Schedule Service

Responsibilities:
  - Read-only schedule views (day detail, range summaries, my shifts,
    dashboard context, export rows)

Collaborators:
  - Users/Locations/Events/Shifts/Assignments services (loading)
  - application.aggregation (pure computation)

Notes:
  - Loads each collection once per call, then aggregates in memory
"""

from __future__ import annotations

from typing import Dict, List

from ...domain.entities import Assignment
from ..aggregation import (
    build_day_views,
    build_export_rows,
    build_user_shift_views,
    summarize_days,
)
from ..schedule_results import (
    DashboardContext,
    DayShiftView,
    DaySummary,
    Occupancy,
    ShiftExportRow,
    UserShiftView,
)
from .assignments import AssignmentsService
from .events import EventsService
from .locations import LocationsService
from .shifts import ShiftsService
from .users import UsersService


class ScheduleService:
    def __init__(
        self,
        *,
        users: UsersService,
        locations: LocationsService,
        events: EventsService,
        shifts: ShiftsService,
        assignments: AssignmentsService,
    ):
        self.users = users
        self.locations = locations
        self.events = events
        self.shifts = shifts
        self.assignments = assignments

    def occupancy(self, shift_id: str) -> Occupancy:
        return self.shifts.occupancy(shift_id)

    def get_day_details(self, date: str) -> List[DayShiftView]:
        shifts = self.shifts.for_date(date)
        assignments = self._assignments_for(shift.id for shift in shifts)
        return build_day_views(shifts, assignments, self.users.load_all())

    def get_day_summaries(self, start_date: str, end_date: str) -> Dict[str, DaySummary]:
        shifts = self.shifts.for_date_range(start_date, end_date)
        assignments = self._assignments_for(shift.id for shift in shifts)
        return summarize_days(shifts, assignments)

    def my_shifts(self, user_id: str) -> List[UserShiftView]:
        assignments = self.assignments.for_user(user_id)
        shifts = self.shifts.for_ids({a.shift_id for a in assignments})
        return build_user_shift_views(assignments, shifts, self.locations.load_all())

    def dashboard_context(self, start_date: str, end_date: str) -> DashboardContext:
        return DashboardContext(
            summaries=self.get_day_summaries(start_date, end_date),
            locations=self.locations.load_all(),
            events=self.events.for_date_range(start_date, end_date),
        )

    def export_rows(self) -> List[ShiftExportRow]:
        return build_export_rows(
            self.shifts.load_all(),
            self.assignments.load_all(),
            self.users.load_all(),
            self.locations.load_all(),
        )

    def _assignments_for(self, shift_ids) -> List[Assignment]:
        return self.assignments.for_shift_ids(sorted(set(shift_ids)))
