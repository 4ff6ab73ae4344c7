"""
Name: Users Service

Responsibilities:
  - CRUD over user records
  - Email lookup (case-insensitive) and the active-user lookup used for sign-in
  - Preference and per-date availability updates

Collaborators:
  - BaseCrudService
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional

from ...crosscutting.exceptions import ValidationError
from ...domain.entities import AvailabilityStatus, StaffRole, User
from .base_crud import BaseCrudService


class UsersService(BaseCrudService[User]):
    entity_type = User

    def _claim_email(
        self, data: Mapping[str, Any], owner_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """R: Normalize the email key and reject one held by another user."""
        values = self._normalize(data)
        email = values.get("email")
        if isinstance(email, str):
            email = email.strip()
            values["email"] = email
            holder = self.find_by_email(email) if email else None
            if holder is not None and holder.id != owner_id:
                raise ValidationError(f"User with email {email!r} already exists")
        return values

    def create(self, data: Mapping[str, Any]) -> User:
        return super().create(self._claim_email(data))

    def update(self, record_id: str, patch: Mapping[str, Any]) -> Optional[User]:
        return super().update(record_id, self._claim_email(patch, owner_id=record_id))

    def find_by_email(self, email: str) -> Optional[User]:
        wanted = email.strip().lower()
        for user in self.load_all():
            if user.email.lower() == wanted:
                return user
        return None

    def find_active_by_email(self, email: str) -> Optional[User]:
        """Inactive accounts are treated as absent for sign-in."""
        user = self.find_by_email(email)
        if user is None or not user.active:
            return None
        return user

    def assignable_workers(self) -> List[User]:
        """R: Active users a manager can put on a shift, sorted by name."""
        return sorted(
            (user for user in self.load_all() if user.active),
            key=lambda user: user.name.lower(),
        )

    def update_preferences(
        self, user_id: str, preferred_roles: Iterable[StaffRole | str]
    ) -> Optional[User]:
        return self.update(user_id, {"preferred_roles": list(preferred_roles)})

    def update_availability(
        self, user_id: str, date: str, status: AvailabilityStatus | str
    ) -> Optional[User]:
        user = self.find_by_id(user_id)
        if user is None:
            return None
        availability = {**user.availability_by_date, date: status}
        return self.update(user_id, {"availability_by_date": availability})
