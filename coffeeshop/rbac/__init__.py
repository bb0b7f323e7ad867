from .roles import (
    Role,
    Permission,
    RoleDefinition,
    RoleRegistry,
    RoleRegistryError,
    ROLE_DEFINITIONS,
    default_registry,
)
from .permissions import PermissionResolver, AccessPolicy, access_policy

__all__ = [
    "Role",
    "Permission",
    "RoleDefinition",
    "RoleRegistry",
    "RoleRegistryError",
    "ROLE_DEFINITIONS",
    "default_registry",
    "PermissionResolver",
    "AccessPolicy",
    "access_policy",
]
