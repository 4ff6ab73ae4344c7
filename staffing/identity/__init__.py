"""Identity: resource access policies."""

from .rbac import (
    RESOURCE_POLICIES,
    AccessMode,
    ResourcePolicy,
    assert_role,
    authorize,
    can_access,
    can_self_signup,
)

__all__ = [
    "RESOURCE_POLICIES",
    "AccessMode",
    "ResourcePolicy",
    "assert_role",
    "authorize",
    "can_access",
    "can_self_signup",
]
