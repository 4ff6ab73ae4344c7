"""Locations Service: plain CRUD over venues."""

from __future__ import annotations

from ...domain.entities import Location
from .base_crud import BaseCrudService


class LocationsService(BaseCrudService[Location]):
    entity_type = Location
