"""
Name: Schedule Aggregation

Responsibilities:
  - Occupancy arithmetic over assignments
  - Day detail, day/range summaries, per-user shift lists, export rows

Collaborators:
  - schedule_results (output shapes)

Constraints:
  - Pure functions over already-loaded collections (no I/O)
  - A missing foreign-key target is dropped or left unresolved, never raised

Notes:
  - Times compare as strings; FLEXIBLE_END_TIME is non-numeric so it
    sorts after every HH:MM value
"""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple

from ..domain.entities import (
    MIXED_DAY_TYPE,
    Assignment,
    AssignmentStatus,
    Location,
    Shift,
    User,
)
from .schedule_results import (
    AssignmentView,
    DayShiftView,
    DaySummary,
    LocationSummary,
    Occupancy,
    ShiftExportRow,
    UserShiftView,
)


# =========================================================
# Ordering
# =========================================================
def day_order_key(shift: Shift) -> Tuple[str, str]:
    return (shift.start_time, shift.end_time)


def range_order_key(shift: Shift) -> Tuple[str, str, str]:
    return (shift.date, shift.start_time, shift.end_time)


def calendar_order_key(shift: Shift) -> Tuple[str, str]:
    return (shift.date, shift.start_time)


# =========================================================
# Occupancy
# =========================================================
def count_occupancy(assignments: Iterable[Assignment]) -> Occupancy:
    confirmed = pending = total = 0
    for assignment in assignments:
        total += 1
        if assignment.status == AssignmentStatus.CONFIRMED:
            confirmed += 1
        elif assignment.status == AssignmentStatus.PENDING:
            pending += 1
    return Occupancy(confirmed=confirmed, pending=pending, total=total)


def group_by_shift(assignments: Iterable[Assignment]) -> Dict[str, List[Assignment]]:
    grouped: Dict[str, List[Assignment]] = defaultdict(list)
    for assignment in assignments:
        grouped[assignment.shift_id].append(assignment)
    return dict(grouped)


# =========================================================
# Views
# =========================================================
def build_day_views(
    shifts: Sequence[Shift],
    assignments: Iterable[Assignment],
    users: Iterable[User],
) -> List[DayShiftView]:
    """R: One view per shift, ordered by start then end time."""
    by_shift = group_by_shift(assignments)
    user_map = {user.id: user for user in users}

    views: List[DayShiftView] = []
    for shift in sorted(shifts, key=day_order_key):
        items = by_shift.get(shift.id, [])
        annotated = []
        for assignment in items:
            user = user_map.get(assignment.user_id)
            annotated.append(
                AssignmentView(
                    assignment=assignment,
                    user_name=user.name if user else None,
                    user_role=user.role.value if user else None,
                )
            )
        views.append(
            DayShiftView(shift=shift, assignments=annotated, occupancy=count_occupancy(items))
        )
    return views


def summarize_days(
    shifts: Sequence[Shift], assignments: Iterable[Assignment]
) -> Dict[str, DaySummary]:
    """
    Group shifts by date, then by location.

    Returns a dict keyed by date in ascending order. Each summary
    accumulates minimum headcount and confirmed/pending counts; location
    summaries are ordered by location id.
    """
    by_shift = group_by_shift(assignments)
    summaries: Dict[str, DaySummary] = {}
    locations: Dict[str, Dict[str, LocationSummary]] = defaultdict(dict)

    for shift in sorted(shifts, key=range_order_key):
        occupancy = count_occupancy(by_shift.get(shift.id, []))
        shift_type = shift.type.value

        day = summaries.get(shift.date)
        if day is None:
            day = summaries[shift.date] = DaySummary(date=shift.date, day_type=shift_type)
        elif day.day_type != shift_type:
            day.day_type = MIXED_DAY_TYPE
        day.shifts.append(shift)
        day.minimum_people += shift.minimum_people
        day.confirmed_count += occupancy.confirmed
        day.pending_count += occupancy.pending

        location = locations[shift.date].setdefault(
            shift.location_id, LocationSummary(location_id=shift.location_id)
        )
        location.shift_ids.append(shift.id)
        if shift_type not in location.shift_types:
            location.shift_types.append(shift_type)
        location.minimum_people += shift.minimum_people
        location.confirmed_count += occupancy.confirmed
        location.pending_count += occupancy.pending

    for date, day in summaries.items():
        day.location_summaries = [
            locations[date][location_id] for location_id in sorted(locations[date])
        ]
    return summaries


def build_user_shift_views(
    assignments: Iterable[Assignment],
    shifts: Iterable[Shift],
    locations: Iterable[Location],
) -> List[UserShiftView]:
    """R: Join assignments to shifts (orphans dropped) and locations (may be None)."""
    shift_map = {shift.id: shift for shift in shifts}
    location_map = {location.id: location for location in locations}

    views = []
    for assignment in assignments:
        shift = shift_map.get(assignment.shift_id)
        if shift is None:
            continue
        views.append(
            UserShiftView(
                assignment=assignment,
                shift=shift,
                location=location_map.get(shift.location_id),
            )
        )
    return sorted(views, key=lambda view: calendar_order_key(view.shift))


def describe_assignment(assignment: Assignment, users: Mapping[str, User]) -> str:
    user = users.get(assignment.user_id)
    name = user.name if user else assignment.user_id
    return f"{name} ({assignment.staff_role.value}/{assignment.status.value})"


def build_export_rows(
    shifts: Iterable[Shift],
    assignments: Iterable[Assignment],
    users: Iterable[User],
    locations: Iterable[Location],
) -> List[ShiftExportRow]:
    by_shift = group_by_shift(assignments)
    user_map = {user.id: user for user in users}
    location_map = {location.id: location for location in locations}

    rows = []
    for shift in sorted(shifts, key=calendar_order_key):
        items = by_shift.get(shift.id, [])
        occupancy = count_occupancy(items)
        location = location_map.get(shift.location_id)
        rows.append(
            ShiftExportRow(
                date=shift.date,
                start_time=shift.start_time,
                end_time=shift.end_time,
                location=location.name if location else shift.location_id,
                type=shift.type.value,
                minimum_people=shift.minimum_people,
                requires_approval=shift.requires_approval,
                occupancy_confirmed=occupancy.confirmed,
                occupancy_pending=occupancy.pending,
                assigned_people="; ".join(
                    describe_assignment(assignment, user_map) for assignment in items
                ),
            )
        )
    return rows
