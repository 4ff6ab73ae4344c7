"""
Name: CRUD Service Tests

Responsibilities:
  - Input validation and normalization in BaseCrudService
  - Users/Assignments helpers
"""

import pytest

from staffing.crosscutting.exceptions import ValidationError
from staffing.domain.entities import (
    AppRole,
    AssignmentStatus,
    AvailabilityStatus,
    Location,
    StaffRole,
)


@pytest.mark.unit
class TestBaseCrud:
    def test_create_applies_defaults_and_round_trips(self, services):
        location = services.locations.create({"name": "Zahrada", "code": "ZA"})

        assert isinstance(location, Location)
        assert location.address == ""
        assert services.locations.find_by_id(location.id) == location

    def test_create_requires_fields(self, services):
        with pytest.raises(ValidationError, match="Missing Location fields: code"):
            services.locations.create({"name": "Zahrada"})

    def test_create_rejects_unknown_fields(self, services):
        with pytest.raises(ValidationError, match="Unknown Location fields: capacity"):
            services.locations.create({"name": "Zahrada", "code": "ZA", "capacity": 50})

    def test_create_rejects_invalid_enum(self, services, location):
        with pytest.raises(ValidationError, match="Shift.type"):
            services.shifts.create(
                {
                    "date": "2024-06-01",
                    "startTime": "10:00",
                    "endTime": "22:00",
                    "locationId": location.id,
                    "type": "banquet",
                }
            )

    def test_update_masks_identity_fields(self, services, location):
        updated = services.locations.update(
            location.id,
            {"id": "other", "created_at": "1999", "updatedAt": "1999", "address": "Ulice 2"},
        )

        assert updated.id == location.id
        assert updated.created_at == location.created_at
        assert updated.address == "Ulice 2"

    def test_update_cannot_clear_required_field(self, services, location):
        with pytest.raises(ValidationError, match="Cannot clear required"):
            services.locations.update(location.id, {"name": None})

    def test_update_missing_returns_none(self, services):
        assert services.locations.update("missing", {"name": "x"}) is None

    def test_delete(self, services, location):
        assert services.locations.delete(location.id) is True
        assert services.locations.delete(location.id) is False
        assert services.locations.load_all() == []


@pytest.mark.unit
class TestUsersService:
    def test_find_by_email_is_case_insensitive(self, services, worker):
        assert services.users.find_by_email("JANA@Example.com").id == worker.id
        assert services.users.find_by_email("nobody@example.com") is None

    def test_duplicate_email_is_rejected(self, services, worker):
        with pytest.raises(ValidationError, match="already exists"):
            services.users.create(
                {
                    "name": "Jana 2",
                    "email": "Jana@example.com",
                    "passwordHash": "h",
                    "role": "brigadnik",
                }
            )

    def test_update_cannot_take_another_users_email(self, services, worker):
        adam = services.users.create(
            {"name": "Adam", "email": "adam@example.com", "passwordHash": "h", "role": "brigadnik"}
        )

        with pytest.raises(ValidationError, match="already exists"):
            services.users.update(adam.id, {"email": "JANA@example.com"})
        with pytest.raises(ValidationError, match="already exists"):
            services.users.update(adam.id, {"Email": " jana@example.com "})

        emails = sorted(user.email for user in services.users.load_all())
        assert emails == ["adam@example.com", "jana@example.com"]

    def test_update_keeps_own_email_and_strips_it(self, services, worker):
        same = services.users.update(worker.id, {"email": "JANA@example.com"})
        moved = services.users.update(worker.id, {"email": "  jana.novakova@example.com "})

        assert same.email == "JANA@example.com"
        assert moved.email == "jana.novakova@example.com"
        assert services.users.find_by_email("Jana.Novakova@example.com").id == worker.id

    def test_find_active_by_email_skips_inactive(self, services, worker):
        services.users.update(worker.id, {"active": False})

        assert services.users.find_active_by_email("jana@example.com") is None

    def test_assignable_workers_are_active_and_sorted(self, services, worker, manager):
        services.users.update(manager.id, {"active": False})
        services.users.create(
            {"name": "Adam", "email": "adam@example.com", "passwordHash": "h", "role": "brigadnik"}
        )

        names = [user.name for user in services.users.assignable_workers()]

        assert names == ["Adam", "Jana Nováková"]

    def test_update_preferences(self, services, worker):
        updated = services.users.update_preferences(worker.id, ["kitchen", StaffRole.BAR])

        assert updated.preferred_roles == [StaffRole.KITCHEN, StaffRole.BAR]
        assert updated.role is AppRole.WORKER

    def test_update_availability_merges_dates(self, services, worker):
        services.users.update_availability(worker.id, "2024-06-01", "available")
        updated = services.users.update_availability(
            worker.id, "2024-06-02", AvailabilityStatus.UNAVAILABLE
        )

        assert updated.availability_by_date == {
            "2024-06-01": AvailabilityStatus.AVAILABLE,
            "2024-06-02": AvailabilityStatus.UNAVAILABLE,
        }

    def test_update_availability_for_missing_user(self, services):
        assert services.users.update_availability("missing", "2024-06-01", "available") is None


@pytest.mark.unit
class TestAssignmentsService:
    def test_lookups_and_status(self, services, make_shift, worker, manager):
        first = make_shift()
        second = make_shift(date="2024-06-02")
        a1 = services.shifts.signup(first.id, worker)
        services.shifts.signup(second.id, worker)
        services.shifts.signup(first.id, manager)

        assert len(services.assignments.for_shift(first.id)) == 2
        assert len(services.assignments.for_user(worker.id)) == 2
        assert len(services.assignments.for_shift_ids([first.id, second.id])) == 3
        assert services.assignments.for_shift_ids([]) == []

        updated = services.assignments.set_status(a1.id, "pending")
        assert updated.status is AssignmentStatus.PENDING

    def test_delete_for_shift_counts(self, services, make_shift, worker, manager):
        shift = make_shift()
        services.shifts.signup(shift.id, worker)
        services.shifts.signup(shift.id, manager)

        assert services.assignments.delete_for_shift(shift.id) == 2
        assert services.assignments.for_shift(shift.id) == []
