"""
Name: Schedule Read Models

Responsibilities:
  - Immutable result shapes returned by the aggregation layer

Notes:
  - Nothing here is persisted; every value is derived from loaded records
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..domain.entities import Assignment, Event, Location, Shift


@dataclass(frozen=True)
class Occupancy:
    confirmed: int = 0
    pending: int = 0
    total: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {"confirmed": self.confirmed, "pending": self.pending, "total": self.total}


@dataclass(frozen=True)
class AssignmentView:
    """R: Assignment annotated with the assigned user's display name and app role."""

    assignment: Assignment
    user_name: Optional[str] = None
    user_role: Optional[str] = None


@dataclass(frozen=True)
class DayShiftView:
    shift: Shift
    assignments: List[AssignmentView]
    occupancy: Occupancy


@dataclass
class LocationSummary:
    location_id: str
    shift_ids: List[str] = field(default_factory=list)
    shift_types: List[str] = field(default_factory=list)
    minimum_people: int = 0
    confirmed_count: int = 0
    pending_count: int = 0


@dataclass
class DaySummary:
    """R: One calendar day; day_type is the shared shift type or "mixed"."""

    date: str
    day_type: str
    shifts: List[Shift] = field(default_factory=list)
    minimum_people: int = 0
    confirmed_count: int = 0
    pending_count: int = 0
    location_summaries: List[LocationSummary] = field(default_factory=list)


@dataclass(frozen=True)
class UserShiftView:
    assignment: Assignment
    shift: Shift
    location: Optional[Location] = None


@dataclass(frozen=True)
class DashboardContext:
    summaries: Dict[str, DaySummary]
    locations: List[Location]
    events: List[Event]


@dataclass(frozen=True)
class ShiftExportRow:
    """R: Flat per-shift row for exports (formatting is the caller's job)."""

    date: str
    start_time: str
    end_time: str
    location: str
    type: str
    minimum_people: int
    requires_approval: bool
    occupancy_confirmed: int
    occupancy_pending: int
    assigned_people: str
