"""
Name: Domain Layer Exports

Responsibilities:
  - Centralize entity/port exports for clean imports
"""

from .entities import (
    FLEXIBLE_END_TIME,
    MIXED_DAY_TYPE,
    AppRole,
    Assignment,
    AssignmentStatus,
    AvailabilityStatus,
    Event,
    EventType,
    Location,
    Record,
    Resource,
    RoleRequirement,
    Shift,
    ShiftType,
    StaffRole,
    User,
)
from .repositories import Payload, RecordStore

__all__ = [
    # Constants
    "FLEXIBLE_END_TIME",
    "MIXED_DAY_TYPE",
    # Enums
    "AppRole",
    "AssignmentStatus",
    "AvailabilityStatus",
    "EventType",
    "ShiftType",
    "StaffRole",
    # Entities
    "Record",
    "Resource",
    "RoleRequirement",
    "User",
    "Location",
    "Event",
    "Shift",
    "Assignment",
    # Ports
    "Payload",
    "RecordStore",
]
