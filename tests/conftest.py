"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Isolate settings from the developer's .env
  - Provide file-backed stores and wired services on a tmp data dir
  - Provide sample records (location, users, shift)

Collaborators:
  - pytest: Test framework
  - staffing.infrastructure / staffing.application

Notes:
  - Every fixture builds its own WriteSerializer so tests never share queues
  - Use @pytest.fixture(scope="function") for per-test isolation
"""

import os
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from staffing.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None

if os.getenv("RUN_INTEGRATION") != "1":
    os.environ.pop("DATABASE_URL", None)

from staffing.application.services import (  # noqa: E402
    AssignmentsService,
    EventsService,
    LocationsService,
    ScheduleService,
    ShiftPlanner,
    ShiftsService,
    UsersService,
)
from staffing.domain.entities import Resource  # noqa: E402
from staffing.infrastructure.repositories import JsonRecordStore  # noqa: E402
from staffing.infrastructure.storage import WriteSerializer  # noqa: E402


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (require PostgreSQL)"
    )


# ============================================================================
# Storage Fixtures
# ============================================================================


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """R: Empty data directory for the file backend."""
    path = tmp_path / "data"
    path.mkdir()
    return path


@pytest.fixture
def write_serializer() -> WriteSerializer:
    return WriteSerializer()


@pytest.fixture
def store_factory(data_dir: Path, write_serializer: WriteSerializer):
    """R: Build a JsonRecordStore for a resource in the tmp data dir."""

    def build(resource: Resource) -> JsonRecordStore:
        return JsonRecordStore.in_directory(
            Resource(resource).value,
            data_dir,
            serializer=write_serializer,
            lock_retry_delay=0.001,
        )

    return build


# ============================================================================
# Service Fixtures
# ============================================================================


@pytest.fixture
def services(store_factory) -> SimpleNamespace:
    """R: Services wired the way the container wires them, on JSON files."""
    users = UsersService(store_factory(Resource.USERS))
    locations = LocationsService(store_factory(Resource.LOCATIONS))
    assignments = AssignmentsService(store_factory(Resource.ASSIGNMENTS))
    shifts = ShiftsService(store_factory(Resource.SHIFTS), assignments)
    events = EventsService(store_factory(Resource.EVENTS), shifts)
    schedule = ScheduleService(
        users=users,
        locations=locations,
        events=events,
        shifts=shifts,
        assignments=assignments,
    )
    return SimpleNamespace(
        users=users,
        locations=locations,
        assignments=assignments,
        shifts=shifts,
        events=events,
        schedule=schedule,
        planner=ShiftPlanner(shifts),
    )


# ============================================================================
# Domain Record Fixtures
# ============================================================================


@pytest.fixture
def location(services):
    return services.locations.create(
        {"name": "Hlavní", "code": "HL", "address": "Ulice 1"}
    )


@pytest.fixture
def worker(services):
    return services.users.create(
        {
            "name": "Jana Nováková",
            "email": "jana@example.com",
            "passwordHash": "hash",
            "role": "brigadnik",
            "preferredRoles": ["bar"],
        }
    )


@pytest.fixture
def manager(services):
    return services.users.create(
        {
            "name": "Petr Manažer",
            "email": "petr@example.com",
            "passwordHash": "hash",
            "role": "manager",
        }
    )


@pytest.fixture
def make_shift(services, location):
    """R: Create a shift at the sample location (overrides via kwargs)."""

    def build(**overrides):
        data = {
            "date": "2024-06-01",
            "start_time": "10:00",
            "end_time": "22:00",
            "location_id": location.id,
            "type": "restaurant",
            "minimum_people": 2,
        }
        data.update(overrides)
        return services.shifts.create(data)

    return build
