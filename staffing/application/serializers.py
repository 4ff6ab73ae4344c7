"""
Name: Record Serializers

Responsibilities:
  - Turn entities into camelCase dicts for callers
  - Strip secrets (user password hashes)
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List

from ..domain.entities import Record, Resource

SECRET_FIELDS: Dict[Resource, tuple[str, ...]] = {
    Resource.USERS: ("passwordHash",),
}


def serialize_record(resource: Resource | str, record: Record) -> Dict[str, Any]:
    payload = record.to_payload()
    for key in SECRET_FIELDS.get(Resource(resource), ()):
        payload.pop(key, None)
    return payload


def serialize_list(resource: Resource | str, records: Iterable[Record]) -> List[Dict[str, Any]]:
    return [serialize_record(resource, record) for record in records]
