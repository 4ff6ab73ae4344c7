"""
Name: Shift Planner

Responsibilities:
  - Resolve the target dates of a bulk "create shifts" request
    (inclusive range filtered by weekdays, or an explicit date list)
  - Apply presets and per-type default times
  - Upsert one shift per target date at the location

Collaborators:
  - ShiftsService (find_at/create/update)

Notes:
  - An existing shift at the same (date, location) is updated in place
  - Explicit minimum_people wins over the preset's; the result is clamped at 0
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Dict, FrozenSet, Iterable, List, Optional

from ...crosscutting.exceptions import ValidationError
from ...crosscutting.logger import logger
from ...domain.entities import FLEXIBLE_END_TIME, RoleRequirement, Shift, ShiftType
from .shifts import ShiftsService

WEEKDAYS: Dict[str, int] = {
    "mon": 0,
    "tue": 1,
    "wed": 2,
    "thu": 3,
    "fri": 4,
    "sat": 5,
    "sun": 6,
}

_DATE_KEY = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME = re.compile(r"^\d{2}:\d{2}$")
_CUSTOM_DATE_SEPARATORS = re.compile(r"[\s,;]+")


@dataclass(frozen=True)
class ShiftPreset:
    type: ShiftType
    start_time: str
    end_time: str
    minimum_people: int
    notes: str


PRESETS: Dict[str, ShiftPreset] = {
    "restaurant_to_16": ShiftPreset(
        ShiftType.RESTAURANT, "10:00", "16:00", 2, "Restaurace otevřeno do 16:00"
    ),
    "restaurant_full": ShiftPreset(
        ShiftType.RESTAURANT, "10:00", "22:00", 3, "Restaurace standard"
    ),
    "wedding_day": ShiftPreset(ShiftType.WEDDING, "12:00", "23:00", 6, "Svatba"),
    "event_evening": ShiftPreset(ShiftType.EVENT, "16:00", "22:00", 4, "Akce"),
}


def default_times(shift_type: ShiftType) -> tuple[str, str]:
    if shift_type == ShiftType.RESTAURANT:
        return "10:00", "22:00"
    return "12:00", "23:00"


def normalize_time(value: Optional[str]) -> str:
    """R: Keep HH:MM, anything else becomes empty."""
    value = (value or "").strip()
    return value if _TIME.match(value) else ""


def parse_weekdays(names: Iterable[str]) -> FrozenSet[int]:
    """R: mon..sun -> date.weekday() numbers; unknown names are ignored."""
    return frozenset(WEEKDAYS[name] for name in names if name in WEEKDAYS)


def enumerate_dates(
    date_from: str, date_to: str, weekdays: Iterable[int] = ()
) -> List[str]:
    """
    Inclusive calendar walk from date_from to date_to.

    An empty weekday set keeps every day. An unparsable or inverted
    range yields an empty list.
    """
    try:
        start = date.fromisoformat(date_from)
        end = date.fromisoformat(date_to)
    except (TypeError, ValueError):
        return []
    if start > end:
        return []

    allowed = frozenset(weekdays)
    out = []
    current = start
    while current <= end:
        if not allowed or current.weekday() in allowed:
            out.append(current.isoformat())
        current += timedelta(days=1)
    return out


def parse_custom_dates(raw: Optional[str]) -> List[str]:
    values = (value.strip() for value in _CUSTOM_DATE_SEPARATORS.split(raw or ""))
    return sorted({value for value in values if _DATE_KEY.match(value)})


@dataclass
class PlanShiftsInput:
    location_id: str
    date_from: str = ""
    date_to: str = ""
    weekdays: List[str] = field(default_factory=list)
    custom_dates: str = ""
    type: ShiftType = ShiftType.RESTAURANT
    preset: str = ""
    start_time: str = ""
    end_time: str = ""
    flexible_end: bool = False
    minimum_people: Optional[int] = None
    requires_approval: bool = False
    notes: str = ""
    required_roles: List[RoleRequirement] = field(default_factory=list)

    def target_dates(self) -> List[str]:
        custom = parse_custom_dates(self.custom_dates)
        if custom:
            return custom
        date_to = self.date_to or self.date_from
        dates = enumerate_dates(self.date_from, date_to, parse_weekdays(self.weekdays))
        if not dates and self.date_from:
            return [self.date_from]
        return dates


def resolve_shift_fields(request: PlanShiftsInput) -> Dict[str, Any]:
    """R: Shift fields shared by every planned date (preset > input > type defaults)."""
    shift_type = ShiftType(request.type)
    default_start, default_end = default_times(shift_type)
    start_time = normalize_time(request.start_time) or default_start
    end_time = normalize_time(request.end_time) or default_end
    minimum_people = request.minimum_people
    notes = request.notes

    preset = PRESETS.get(request.preset)
    if preset is not None:
        shift_type = preset.type
        start_time = preset.start_time
        end_time = preset.end_time
        notes = preset.notes
        if minimum_people is None:
            minimum_people = preset.minimum_people

    return {
        "start_time": start_time,
        "end_time": FLEXIBLE_END_TIME if request.flexible_end else end_time,
        "location_id": request.location_id,
        "type": shift_type,
        "required_roles": list(request.required_roles),
        "minimum_people": max(0, minimum_people or 0),
        "requires_approval": request.requires_approval,
        "notes": notes or None,
    }


class ShiftPlanner:
    def __init__(self, shifts: ShiftsService):
        self.shifts = shifts

    def plan_shifts(self, request: PlanShiftsInput) -> List[Shift]:
        if not request.location_id:
            raise ValidationError("location_id is required to plan shifts")

        shift_fields = resolve_shift_fields(request)
        planned: List[Shift] = []
        created = 0
        for target in request.target_dates():
            existing = self.shifts.find_at(target, request.location_id)
            if existing is not None:
                shift = self.shifts.update(existing.id, {**shift_fields, "date": target})
                planned.append(shift or existing)
            else:
                planned.append(self.shifts.create({**shift_fields, "date": target}))
                created += 1

        logger.info(
            "Shifts planned",
            extra={
                "location_id": request.location_id,
                "created_count": created,
                "updated_count": len(planned) - created,
            },
        )
        return planned
