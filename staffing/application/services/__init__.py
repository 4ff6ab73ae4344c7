"""Application services: typed facades and scheduling workflows."""

from .assignments import AssignmentsService
from .base_crud import BaseCrudService
from .events import EventsService
from .locations import LocationsService
from .schedule import ScheduleService
from .shift_planner import PlanShiftsInput, ShiftPlanner
from .shifts import ShiftsService
from .users import UsersService

__all__ = [
    "AssignmentsService",
    "BaseCrudService",
    "EventsService",
    "LocationsService",
    "PlanShiftsInput",
    "ScheduleService",
    "ShiftPlanner",
    "ShiftsService",
    "UsersService",
]
