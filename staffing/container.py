"""
Name: Dependency Injection Container

Responsibilities:
  - Choose the storage backend once (Postgres when DATABASE_URL is set,
    JSON files otherwise)
  - Provide singleton record stores and services
  - Expose the resource registry (name -> service)

Collaborators:
  - crosscutting.config: backend selection and pool/lock settings
  - infrastructure.repositories: JsonRecordStore, PostgresRecordStore
  - application.services: typed facades and workflows

Constraints:
  - Manual DI (no library like dependency-injector)
  - Singletons via functools.lru_cache
  - Callers never branch on which backend is active

Notes:
  - This is the composition root (where dependencies are wired)
  - reset_container() clears every cached singleton (tests, reconfiguration)
"""

from __future__ import annotations

from functools import lru_cache
from typing import Dict

from .crosscutting.config import get_settings
from .crosscutting.exceptions import UnknownResourceError
from .crosscutting.logger import logger
from .domain.entities import Resource
from .domain.repositories import RecordStore
from .application.services import (
    AssignmentsService,
    BaseCrudService,
    EventsService,
    LocationsService,
    ScheduleService,
    ShiftPlanner,
    ShiftsService,
    UsersService,
)
from .infrastructure.db.pool import ensure_pool
from .infrastructure.repositories import JsonRecordStore, PostgresRecordStore
from .infrastructure.storage import JsonTableFile


# =========================================================
# Record stores
# =========================================================
def _seed_table(resource: Resource) -> JsonTableFile:
    settings = get_settings()
    return JsonTableFile(
        settings.data_path / resource.filename,
        lock_retries=settings.lock_retries,
        lock_retry_delay=settings.lock_retry_delay_seconds,
    )


def get_record_store(resource: Resource | str) -> RecordStore:
    """R: One store per resource, backend chosen from settings."""
    return _build_record_store(Resource(resource).value)


@lru_cache(maxsize=None)
def _build_record_store(name: str) -> RecordStore:
    settings = get_settings()
    resource = Resource(name)
    if settings.uses_postgres:
        settings.validate_pool_params()
        pool = ensure_pool(
            settings.database_url,
            settings.db_pool_min_size,
            settings.db_pool_max_size,
        )
        store: RecordStore = PostgresRecordStore(
            resource.value, pool=pool, seed_table=_seed_table(resource)
        )
    else:
        store = JsonRecordStore(resource.value, _seed_table(resource))
    logger.info(
        "Record store ready",
        extra={"resource": resource.value, "backend": type(store).__name__},
    )
    return store


# =========================================================
# Services
# =========================================================
@lru_cache
def get_users_service() -> UsersService:
    return UsersService(get_record_store(Resource.USERS))


@lru_cache
def get_locations_service() -> LocationsService:
    return LocationsService(get_record_store(Resource.LOCATIONS))


@lru_cache
def get_assignments_service() -> AssignmentsService:
    return AssignmentsService(get_record_store(Resource.ASSIGNMENTS))


@lru_cache
def get_shifts_service() -> ShiftsService:
    return ShiftsService(get_record_store(Resource.SHIFTS), get_assignments_service())


@lru_cache
def get_events_service() -> EventsService:
    return EventsService(get_record_store(Resource.EVENTS), get_shifts_service())


@lru_cache
def get_schedule_service() -> ScheduleService:
    return ScheduleService(
        users=get_users_service(),
        locations=get_locations_service(),
        events=get_events_service(),
        shifts=get_shifts_service(),
        assignments=get_assignments_service(),
    )


@lru_cache
def get_shift_planner() -> ShiftPlanner:
    return ShiftPlanner(get_shifts_service())


# =========================================================
# Resource registry
# =========================================================
def get_resource_services() -> Dict[Resource, BaseCrudService]:
    return {
        Resource.USERS: get_users_service(),
        Resource.LOCATIONS: get_locations_service(),
        Resource.EVENTS: get_events_service(),
        Resource.SHIFTS: get_shifts_service(),
        Resource.ASSIGNMENTS: get_assignments_service(),
    }


def get_resource_service(name: str) -> BaseCrudService:
    try:
        resource = Resource(name)
    except ValueError as exc:
        raise UnknownResourceError(f"Unknown resource: {name}", original_error=exc) from exc
    return get_resource_services()[resource]


def reset_container() -> None:
    for factory in (
        _build_record_store,
        get_users_service,
        get_locations_service,
        get_assignments_service,
        get_shifts_service,
        get_events_service,
        get_schedule_service,
        get_shift_planner,
    ):
        factory.cache_clear()
