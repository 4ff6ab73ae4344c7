"""
Name: Resource Access Policies

Responsibilities:
  - Declare which app roles may read/write each resource
  - Provide authorization checks that raise typed errors

Collaborators:
  - domain.entities: AppRole, Resource, User
  - crosscutting.exceptions: UnauthenticatedError, ForbiddenError

Constraints:
  - A missing or inactive user is unauthenticated
  - Roles are flat (no inheritance): a policy lists every allowed role

Notes:
  - Self sign-up onto shifts is allowed for workers and admins
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Iterable, Optional

from ..crosscutting.exceptions import ForbiddenError, UnauthenticatedError
from ..crosscutting.logger import logger
from ..domain.entities import AppRole, Resource, User


class AccessMode(str, Enum):
    READ = "read"
    WRITE = "write"


@dataclass(frozen=True)
class ResourcePolicy:
    """Roles allowed to read and to write one resource."""

    read: FrozenSet[AppRole]
    write: FrozenSet[AppRole]

    def allows(self, role: AppRole, mode: AccessMode) -> bool:
        allowed = self.read if mode == AccessMode.READ else self.write
        return role in allowed


_EVERYONE = frozenset({AppRole.WORKER, AppRole.MANAGER, AppRole.ADMIN})
_STAFF = frozenset({AppRole.MANAGER, AppRole.ADMIN})
_ADMIN = frozenset({AppRole.ADMIN})

RESOURCE_POLICIES: Dict[Resource, ResourcePolicy] = {
    Resource.USERS: ResourcePolicy(read=_ADMIN, write=_ADMIN),
    Resource.LOCATIONS: ResourcePolicy(read=_EVERYONE, write=_ADMIN),
    Resource.EVENTS: ResourcePolicy(read=_EVERYONE, write=_STAFF),
    Resource.SHIFTS: ResourcePolicy(read=_EVERYONE, write=_STAFF),
    Resource.ASSIGNMENTS: ResourcePolicy(read=_STAFF, write=_STAFF),
}

SELF_SIGNUP_ROLES = frozenset({AppRole.WORKER, AppRole.ADMIN})


def _require_user(user: Optional[User]) -> User:
    if user is None or not user.active:
        raise UnauthenticatedError("Unauthenticated")
    return user


def can_access(user: Optional[User], resource: Resource | str, mode: AccessMode | str) -> bool:
    if user is None or not user.active:
        return False
    policy = RESOURCE_POLICIES[Resource(resource)]
    return policy.allows(user.role, AccessMode(mode))


def authorize(user: Optional[User], resource: Resource | str, mode: AccessMode | str) -> User:
    """
    Check a user against a resource policy.

    Returns:
        The authorized user

    Raises:
        UnauthenticatedError: no user or an inactive one
        ForbiddenError: role not in the policy for this mode
    """
    current = _require_user(user)
    resource = Resource(resource)
    mode = AccessMode(mode)
    if not RESOURCE_POLICIES[resource].allows(current.role, mode):
        logger.warning(
            "Access denied",
            extra={
                "user_id": current.id,
                "role": current.role.value,
                "resource": resource.value,
                "mode": mode.value,
            },
        )
        raise ForbiddenError(f"Forbidden: {mode.value} {resource.value}")
    return current


def assert_role(user: Optional[User], roles: Iterable[AppRole | str]) -> User:
    current = _require_user(user)
    allowed = {AppRole(role) for role in roles}
    if current.role not in allowed:
        raise ForbiddenError("Forbidden")
    return current


def can_self_signup(user: Optional[User]) -> bool:
    return user is not None and user.active and user.role in SELF_SIGNUP_ROLES
