"""
Name: Events Service

Responsibilities:
  - CRUD over weddings/events
  - Keep each event's generated shift in sync (event is the source of truth)
  - Date and date-range lookups

Collaborators:
  - ShiftsService (upsert + cascading delete of the generated shift)

Constraints:
  - Creating an event adopts ANY existing shift at the same (date, location),
    even one created independently; that shift is overwritten
  - Event -> shift -> assignments steps are separate writes, not a transaction

Notes:
  - Edits made directly on a generated shift are not copied back to the event
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from ...crosscutting.logger import logger
from ...domain.entities import Event, Shift, to_payload_value
from .base_crud import BaseCrudService
from .shifts import ShiftsService


def mirrored_shift_fields(event: Event) -> Dict[str, Any]:
    """R: Shift fields an event owns."""
    return {
        "date": event.date,
        "start_time": event.start_time,
        "end_time": event.end_time,
        "location_id": event.location_id,
        "type": event.type.value,
        "required_roles": to_payload_value(event.required_roles),
        "minimum_people": event.minimum_people,
        "notes": event.notes,
        "event_id": event.id,
    }


class EventsService(BaseCrudService[Event]):
    entity_type = Event

    def __init__(self, store, shifts: ShiftsService):
        super().__init__(store)
        self.shifts = shifts

    def create(self, data: Mapping[str, Any]) -> Event:
        event = super().create(data)
        shift_fields = {**mirrored_shift_fields(event), "requires_approval": True}

        existing = self.shifts.find_at(event.date, event.location_id)
        shift: Optional[Shift]
        if existing is not None:
            if existing.event_id and existing.event_id != event.id:
                logger.warning(
                    "Event adopts shift owned by another event",
                    extra={
                        "event_id": event.id,
                        "shift_id": existing.id,
                        "previous_event_id": existing.event_id,
                    },
                )
            shift = self.shifts.update(existing.id, shift_fields) or existing
        else:
            shift = self.shifts.create(shift_fields)

        logger.info(
            "Event shift linked",
            extra={
                "event_id": event.id,
                "shift_id": shift.id,
                "adopted": existing is not None,
            },
        )
        return super().update(event.id, {"shift_id": shift.id}) or event

    def update(self, record_id: str, patch: Mapping[str, Any]) -> Optional[Event]:
        event = super().update(record_id, patch)
        if event is None:
            return None
        if event.shift_id:
            self.shifts.update(event.shift_id, mirrored_shift_fields(event))
        return event

    def delete(self, record_id: str) -> bool:
        event = self.find_by_id(record_id)
        deleted = super().delete(record_id)
        if deleted and event is not None and event.shift_id:
            self.shifts.delete_cascade(event.shift_id)
        return deleted

    def for_date(self, date: str) -> List[Event]:
        events = self._to_entities(self.store.find_by_field("date", date))
        return sorted(events, key=lambda event: (event.start_time, event.name))

    def for_date_range(self, start_date: str, end_date: str) -> List[Event]:
        events = self._to_entities(
            self.store.find_by_field_range("date", start_date, end_date)
        )
        return sorted(events, key=lambda event: (event.date, event.start_time, event.name))
