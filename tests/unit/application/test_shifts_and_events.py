"""
Name: Shift and Event Workflow Tests

Responsibilities:
  - Sign-up status rules and idempotency
  - Occupancy counts and cascading deletes
  - Event -> shift mirroring (create, update, delete, adoption)
"""

import pytest

from staffing.crosscutting.exceptions import ShiftNotFoundError
from staffing.domain.entities import (
    FLEXIBLE_END_TIME,
    AssignmentStatus,
    RoleRequirement,
    ShiftType,
    StaffRole,
)


def _add_worker(services, name: str):
    return services.users.create(
        {
            "name": name,
            "email": f"{name.lower()}@example.com",
            "passwordHash": "hash",
            "role": "brigadnik",
        }
    )


@pytest.mark.unit
class TestShiftLookups:
    def test_for_date_sorted_by_start_then_end(self, services, make_shift):
        late = make_shift(start_time="16:00", end_time="22:00")
        flexible = make_shift(start_time="10:00", end_time=FLEXIBLE_END_TIME)
        early = make_shift(start_time="10:00", end_time="14:00")
        make_shift(date="2024-06-02")

        shifts = services.shifts.for_date("2024-06-01")

        assert [s.id for s in shifts] == [early.id, flexible.id, late.id]

    def test_for_date_range_sorted_by_date(self, services, make_shift):
        third = make_shift(date="2024-06-03")
        first = make_shift(date="2024-06-01", start_time="12:00")
        second = make_shift(date="2024-06-01", start_time="08:00")
        make_shift(date="2024-07-01")

        shifts = services.shifts.for_date_range("2024-06-01", "2024-06-30")

        assert [s.id for s in shifts] == [second.id, first.id, third.id]

    def test_for_ids(self, services, make_shift):
        shift = make_shift()
        make_shift(date="2024-06-02")

        assert [s.id for s in services.shifts.for_ids([shift.id])] == [shift.id]
        assert services.shifts.for_ids([]) == []


@pytest.mark.unit
class TestSignup:
    def test_signup_is_idempotent(self, services, make_shift, worker):
        shift = make_shift()

        first = services.shifts.signup(shift.id, worker)
        second = services.shifts.signup(shift.id, worker, StaffRole.KITCHEN)

        assert second.id == first.id
        assert len(services.assignments.for_shift(shift.id)) == 1

    def test_status_confirmed_without_approval(self, services, make_shift, worker):
        shift = make_shift()

        assignment = services.shifts.signup(shift.id, worker)

        assert assignment.status is AssignmentStatus.CONFIRMED
        assert assignment.staff_role is StaffRole.BAR

    def test_status_pending_when_approval_required(self, services, make_shift, worker):
        shift = make_shift(requires_approval=True)

        assignment = services.shifts.signup(shift.id, worker, "service")

        assert assignment.status is AssignmentStatus.PENDING
        assert assignment.staff_role is StaffRole.SERVICE

    def test_forced_status_wins(self, services, make_shift, worker):
        shift = make_shift(requires_approval=True)

        assignment = services.shifts.signup(shift.id, worker, force_status="confirmed")

        assert assignment.status is AssignmentStatus.CONFIRMED

    def test_unknown_shift_raises(self, services, worker):
        with pytest.raises(ShiftNotFoundError):
            services.shifts.signup("missing", worker)

    def test_unassign(self, services, make_shift, worker):
        shift = make_shift()
        services.shifts.signup(shift.id, worker)

        assert services.shifts.unassign(shift.id, worker.id) is True
        assert services.shifts.unassign(shift.id, worker.id) is False


@pytest.mark.unit
class TestOccupancyAndCascade:
    def test_occupancy_counts(self, services, make_shift):
        shift = make_shift()
        workers = [_add_worker(services, f"Worker{i}") for i in range(5)]
        for index, user in enumerate(workers):
            status = "confirmed" if index < 3 else "pending"
            services.shifts.signup(shift.id, user, force_status=status)

        occupancy = services.shifts.occupancy(shift.id)

        assert occupancy.to_dict() == {"confirmed": 3, "pending": 2, "total": 5}

    def test_delete_cascade_removes_assignments(self, services, make_shift):
        shift = make_shift()
        other = make_shift(date="2024-06-02")
        for i in range(3):
            services.shifts.signup(shift.id, _add_worker(services, f"W{i}"))
        survivor = services.shifts.signup(other.id, _add_worker(services, "Keep"))

        assert services.shifts.delete_cascade(shift.id) is True

        assert services.shifts.find_by_id(shift.id) is None
        remaining = services.assignments.load_all()
        assert [a.id for a in remaining] == [survivor.id]

    def test_plain_delete_also_removes_assignments(self, services, make_shift, worker):
        shift = make_shift()
        services.shifts.signup(shift.id, worker)

        assert services.shifts.delete(shift.id) is True

        assert services.assignments.for_shift(shift.id) == []
        assert services.shifts.delete(shift.id) is False


@pytest.mark.unit
class TestEventCascade:
    def _event(self, location, **overrides):
        data = {
            "name": "Svatba Novákovi",
            "type": "wedding",
            "date": "2024-06-01",
            "startTime": "12:00",
            "endTime": "23:00",
            "locationId": location.id,
            "minimumPeople": 6,
        }
        data.update(overrides)
        return data

    def test_wedding_scenario(self, services, location):
        event = services.events.create(self._event(location))

        shifts = services.shifts.for_date("2024-06-01")
        assert len(shifts) == 1
        shift = shifts[0]
        assert shift.type is ShiftType.WEDDING
        assert shift.requires_approval is True
        assert shift.minimum_people == 6
        assert shift.event_id == event.id
        assert event.shift_id == shift.id
        assert services.events.find_by_id(event.id).shift_id == shift.id

        assert services.events.delete(event.id) is True
        remaining = [
            s for s in services.shifts.for_date("2024-06-01") if s.location_id == location.id
        ]
        assert remaining == []

    def test_generated_shift_mirrors_event_fields(self, services, location):
        event = services.events.create(
            self._event(
                location,
                endTime=FLEXIBLE_END_TIME,
                requiredRoles=[{"role": "bar", "count": 2}],
                notes="Dress code",
            )
        )
        shift = services.shifts.find_by_id(event.shift_id)

        assert (shift.date, shift.start_time, shift.end_time, shift.location_id) == (
            event.date,
            event.start_time,
            event.end_time,
            event.location_id,
        )
        assert shift.required_roles == [RoleRequirement(StaffRole.BAR, 2)]
        assert shift.notes == "Dress code"

    def test_update_propagates_to_shift(self, services, location):
        other = services.locations.create({"name": "Zahrada", "code": "ZA"})
        event = services.events.create(self._event(location, notes="Old"))

        updated = services.events.update(
            event.id,
            {"date": "2024-06-08", "startTime": "14:00", "locationId": other.id, "notes": None},
        )

        shift = services.shifts.find_by_id(event.shift_id)
        assert (shift.date, shift.start_time, shift.end_time, shift.location_id) == (
            "2024-06-08",
            "14:00",
            "23:00",
            other.id,
        )
        assert shift.notes is None
        assert updated.notes is None
        assert shift.requires_approval is True

    def test_update_missing_event_returns_none(self, services):
        assert services.events.update("missing", {"name": "x"}) is None

    def test_create_adopts_existing_shift_at_same_place(self, services, location, make_shift, worker):
        existing = make_shift(date="2024-06-01", type="restaurant", minimum_people=2)
        services.shifts.signup(existing.id, worker)

        event = services.events.create(self._event(location))

        assert event.shift_id == existing.id
        adopted = services.shifts.find_by_id(existing.id)
        assert adopted.type is ShiftType.WEDDING
        assert adopted.event_id == event.id
        assert adopted.requires_approval is True
        assert len(services.shifts.load_all()) == 1

        services.events.delete(event.id)
        assert services.shifts.find_by_id(existing.id) is None
        assert services.assignments.for_shift(existing.id) == []

    def test_delete_missing_event(self, services):
        assert services.events.delete("missing") is False

    def test_event_date_lookups(self, services, location):
        first = services.events.create(self._event(location, date="2024-06-01"))
        second = services.events.create(self._event(location, date="2024-06-15", name="Akce"))
        services.events.create(self._event(location, date="2024-07-01"))

        assert [e.id for e in services.events.for_date("2024-06-15")] == [second.id]
        assert [e.id for e in services.events.for_date_range("2024-06-01", "2024-06-30")] == [
            first.id,
            second.id,
        ]
