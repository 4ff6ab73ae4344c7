"""
Name: Base CRUD Service

Responsibilities:
  - Typed facade over a RecordStore (payload dicts <-> entity dataclasses)
  - Validate create input and patches against the entity's fields
  - Mask id/createdAt/updatedAt out of patches

Collaborators:
  - domain.repositories.RecordStore
  - domain.entities: Record subclasses and payload converters

Notes:
  - Input keys may be snake_case (Python) or camelCase (persisted form)
  - A None value in a patch removes the field; required fields cannot be removed
"""

from __future__ import annotations

from typing import Any, ClassVar, Dict, Generic, Iterable, List, Mapping, Optional, Type, TypeVar

from ...crosscutting.exceptions import ValidationError
from ...domain.entities import Record, to_camel, to_payload_value, to_snake
from ...domain.repositories import Payload, RecordStore

T = TypeVar("T", bound=Record)

IDENTITY_FIELDS = ("id", "created_at", "updated_at")


class BaseCrudService(Generic[T]):
    """R: load_all / find_by_id / create / update / delete for one resource."""

    entity_type: ClassVar[Type[Record]] = Record

    def __init__(self, store: RecordStore):
        self.store = store

    # =========================================================
    # Conversion
    # =========================================================
    def _to_entity(self, payload: Optional[Payload]) -> Optional[T]:
        if payload is None:
            return None
        return self.entity_type.from_payload(payload)  # type: ignore[return-value]

    def _to_entities(self, payloads: Iterable[Payload]) -> List[T]:
        return [self.entity_type.from_payload(payload) for payload in payloads]  # type: ignore[misc]

    def _normalize(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        values = {to_snake(key): value for key, value in data.items()}
        unknown = sorted(set(values) - set(self.entity_type.field_names()))
        if unknown:
            raise ValidationError(
                f"Unknown {self.entity_type.__name__} fields: {', '.join(unknown)}"
            )
        return values

    def _coerce(self, name: str, value: Any) -> Any:
        try:
            return self.entity_type.convert(name, value)
        except (ValueError, KeyError, TypeError) as exc:
            raise ValidationError(
                f"Invalid value for {self.entity_type.__name__}.{name}: {value!r}",
                original_error=exc,
            ) from exc

    def _prepare_create(self, data: Mapping[str, Any]) -> Payload:
        values = self._normalize(data)
        record_id = values.pop("id", None)
        values.pop("created_at", None)
        values.pop("updated_at", None)

        merged = {**self.entity_type.defaults(), **values}
        missing = [name for name in self.entity_type.required_fields() if merged.get(name) is None]
        if missing:
            raise ValidationError(
                f"Missing {self.entity_type.__name__} fields: {', '.join(missing)}"
            )

        payload = {
            to_camel(name): to_payload_value(self._coerce(name, value))
            for name, value in merged.items()
            if value is not None
        }
        if record_id:
            payload["id"] = str(record_id)
        return payload

    def _prepare_patch(self, patch: Mapping[str, Any]) -> Payload:
        values = self._normalize(patch)
        for name in IDENTITY_FIELDS:
            values.pop(name, None)

        required = set(self.entity_type.required_fields())
        cleared = sorted(name for name, value in values.items() if value is None and name in required)
        if cleared:
            raise ValidationError(
                f"Cannot clear required {self.entity_type.__name__} fields: {', '.join(cleared)}"
            )
        return {
            to_camel(name): to_payload_value(self._coerce(name, value))
            for name, value in values.items()
        }

    # =========================================================
    # CRUD
    # =========================================================
    def load_all(self) -> List[T]:
        return self._to_entities(self.store.load_all())

    def find_by_id(self, record_id: str) -> Optional[T]:
        return self._to_entity(self.store.find_by_id(record_id))

    def create(self, data: Mapping[str, Any]) -> T:
        return self._to_entity(self.store.create(self._prepare_create(data)))  # type: ignore[return-value]

    def update(self, record_id: str, patch: Mapping[str, Any]) -> Optional[T]:
        return self._to_entity(self.store.update(record_id, self._prepare_patch(patch)))

    def delete(self, record_id: str) -> bool:
        return self.store.delete(record_id)
