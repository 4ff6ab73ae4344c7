"""
Name: Domain Entities

Responsibilities:
  - Define the five scheduling records (User, Location, Event, Shift, Assignment)
  - Define the enumerations shared across the core (roles, types, statuses)
  - Convert between persisted payloads (camelCase JSON) and dataclasses

Collaborators:
  - None (pure domain layer, no external dependencies)

Constraints:
  - Persisted field names are camelCase; Python attributes are snake_case
  - Unknown payload keys are ignored on load
  - None-valued optional fields are omitted from payloads

Notes:
  - A record's id/created_at/updated_at are owned by the record store
  - Shift.end_time / Event.end_time may hold FLEXIBLE_END_TIME
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields, MISSING
from enum import Enum
from typing import Any, Callable, ClassVar, Dict, List, Mapping, Optional


# R: End time sentinel meaning "ends when the event ends". Non-numeric, so it
# sorts after every HH:MM value.
FLEXIBLE_END_TIME = "dle situace"

MIXED_DAY_TYPE = "mixed"


class Resource(str, Enum):
    """R: The five record kinds; the value doubles as the storage key."""

    USERS = "users"
    LOCATIONS = "locations"
    EVENTS = "events"
    SHIFTS = "shifts"
    ASSIGNMENTS = "assignments"

    @property
    def filename(self) -> str:
        return f"{self.value}.json"


class AppRole(str, Enum):
    """R: Application roles (brigadnik = casual worker)."""

    WORKER = "brigadnik"
    MANAGER = "manager"
    ADMIN = "admin"


class ShiftType(str, Enum):
    RESTAURANT = "restaurant"
    WEDDING = "wedding"
    EVENT = "event"


class EventType(str, Enum):
    WEDDING = "wedding"
    EVENT = "event"


class StaffRole(str, Enum):
    SERVICE = "service"
    BAR = "bar"
    KITCHEN = "kitchen"
    RUNNER = "runner"


class AssignmentStatus(str, Enum):
    CONFIRMED = "confirmed"
    PENDING = "pending"


class AvailabilityStatus(str, Enum):
    AVAILABLE = "available"
    PREFERRED = "preferred"
    UNAVAILABLE = "unavailable"


_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def to_camel(name: str) -> str:
    """R: snake_case -> camelCase (idempotent for camelCase input)."""
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def to_snake(name: str) -> str:
    """R: camelCase -> snake_case (idempotent for snake_case input)."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def to_payload_value(value: Any) -> Any:
    """R: Turn enums/nested dataclasses into plain JSON-compatible values."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, RoleRequirement):
        return {"role": value.role.value, "count": value.count}
    if isinstance(value, (list, tuple)):
        return [to_payload_value(item) for item in value]
    if isinstance(value, dict):
        return {key: to_payload_value(item) for key, item in value.items()}
    return value


@dataclass
class RoleRequirement:
    """R: How many people of a staff role a shift/event needs."""

    role: StaffRole
    count: int

    @classmethod
    def from_payload(cls, payload: Any) -> "RoleRequirement":
        if isinstance(payload, RoleRequirement):
            return payload
        return cls(role=StaffRole(payload["role"]), count=int(payload["count"]))


def _enum(enum_cls: type[Enum]) -> Callable[[Any], Any]:
    def convert(value: Any) -> Any:
        return value if isinstance(value, enum_cls) else enum_cls(value)

    return convert


def _enum_list(enum_cls: type[Enum]) -> Callable[[Any], Any]:
    convert = _enum(enum_cls)
    return lambda values: [convert(value) for value in (values or [])]


def _enum_map(enum_cls: type[Enum]) -> Callable[[Any], Any]:
    convert = _enum(enum_cls)
    return lambda mapping: {str(k): convert(v) for k, v in (mapping or {}).items()}


def _requirements(values: Any) -> List[RoleRequirement]:
    return [RoleRequirement.from_payload(value) for value in (values or [])]


@dataclass
class Record:
    """
    R: Common identity of every persisted record.

    Subclasses declare CONVERTERS for fields that need coercion
    (enums, nested requirement lists) when loaded from a payload.
    """

    id: str
    created_at: str
    updated_at: str

    CONVERTERS: ClassVar[Dict[str, Callable[[Any], Any]]] = {}

    @classmethod
    def required_fields(cls) -> List[str]:
        """R: Non-identity fields with no default (must be supplied at create)."""
        return [
            f.name
            for f in fields(cls)
            if f.name not in ("id", "created_at", "updated_at")
            and f.default is MISSING
            and f.default_factory is MISSING
        ]

    @classmethod
    def field_names(cls) -> List[str]:
        return [f.name for f in fields(cls)]

    @classmethod
    def defaults(cls) -> Dict[str, Any]:
        """R: Fresh default values for optional fields (None defaults skipped)."""
        out: Dict[str, Any] = {}
        for f in fields(cls):
            if f.default_factory is not MISSING:
                out[f.name] = f.default_factory()
            elif f.default is not MISSING and f.default is not None:
                out[f.name] = f.default
        return out

    @classmethod
    def convert(cls, name: str, value: Any) -> Any:
        """R: Coerce a single field value; raises ValueError/KeyError/TypeError."""
        converter = cls.CONVERTERS.get(name)
        if converter is None or value is None:
            return value
        return converter(value)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]):
        known = set(cls.field_names())
        kwargs: Dict[str, Any] = {}
        for key, value in payload.items():
            name = to_snake(key)
            if name in known:
                kwargs[name] = cls.convert(name, value)
        return cls(**kwargs)

    def to_payload(self) -> Dict[str, Any]:
        """R: camelCase JSON payload (None-valued fields omitted)."""
        payload: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            payload[to_camel(f.name)] = to_payload_value(value)
        return payload


@dataclass
class User(Record):
    name: str
    email: str
    password_hash: str
    role: AppRole
    active: bool = True
    location_ids: List[str] = field(default_factory=list)
    preferred_roles: List[StaffRole] = field(default_factory=list)
    availability_by_date: Dict[str, AvailabilityStatus] = field(default_factory=dict)

    CONVERTERS: ClassVar[Dict[str, Callable[[Any], Any]]] = {
        "role": _enum(AppRole),
        "active": bool,
        "location_ids": lambda values: [str(v) for v in (values or [])],
        "preferred_roles": _enum_list(StaffRole),
        "availability_by_date": _enum_map(AvailabilityStatus),
    }

    @property
    def primary_staff_role(self) -> StaffRole:
        """R: Role used for self sign-up (first preference, else service)."""
        return self.preferred_roles[0] if self.preferred_roles else StaffRole.SERVICE


@dataclass
class Location(Record):
    name: str
    code: str
    address: str = ""


@dataclass
class Event(Record):
    name: str
    type: EventType
    date: str
    start_time: str
    end_time: str
    location_id: str
    required_roles: List[RoleRequirement] = field(default_factory=list)
    minimum_people: int = 0
    notes: Optional[str] = None
    shift_id: Optional[str] = None

    CONVERTERS: ClassVar[Dict[str, Callable[[Any], Any]]] = {
        "type": _enum(EventType),
        "required_roles": _requirements,
        "minimum_people": int,
    }


@dataclass
class Shift(Record):
    date: str
    start_time: str
    end_time: str
    location_id: str
    type: ShiftType
    required_roles: List[RoleRequirement] = field(default_factory=list)
    minimum_people: int = 0
    requires_approval: bool = False
    notes: Optional[str] = None
    event_id: Optional[str] = None

    CONVERTERS: ClassVar[Dict[str, Callable[[Any], Any]]] = {
        "type": _enum(ShiftType),
        "required_roles": _requirements,
        "minimum_people": int,
        "requires_approval": bool,
    }

    @property
    def has_flexible_end(self) -> bool:
        return self.end_time == FLEXIBLE_END_TIME


@dataclass
class Assignment(Record):
    shift_id: str
    user_id: str
    staff_role: StaffRole
    status: AssignmentStatus
    notes: Optional[str] = None

    CONVERTERS: ClassVar[Dict[str, Callable[[Any], Any]]] = {
        "staff_role": _enum(StaffRole),
        "status": _enum(AssignmentStatus),
    }

    @property
    def is_confirmed(self) -> bool:
        return self.status == AssignmentStatus.CONFIRMED
