"""
Permission resolution and authorization decisions.

PermissionResolver computes a role's effective permission set: its direct
permissions unioned with those of every role it inherits from, transitively.

AccessPolicy answers the questions route gates ask. Every method takes the
raw, untrusted role claim, parses it once against the registry, and treats
an unknown claim as "no permissions, not a manager". None of them raise.
"""

from typing import Iterable, Mapping, Optional

from .roles import (
    Permission,
    Role,
    RoleDefinition,
    RoleRegistry,
    WILDCARD_PERMISSION,
    default_registry,
)


class PermissionResolver:
    def __init__(self, definitions: Mapping[Role, RoleDefinition]):
        self.definitions = definitions

    def resolve_permissions(self, role: Role) -> frozenset[Permission]:
        """
        Effective permissions of `role`.

        Walks the inheritance graph iteratively with a visited set, so a
        malformed (cyclic) table yields the partial union instead of
        recursing forever. Roles absent from the table contribute nothing.
        """
        effective: set[Permission] = set()
        visited: set[Role] = set()
        pending = [role]
        while pending:
            current = pending.pop()
            if current in visited:
                continue
            visited.add(current)
            definition = self.definitions.get(current)
            if definition is None:
                continue
            effective.update(definition.permissions)
            pending.extend(definition.inherits_from)
        return frozenset(effective)


class AccessPolicy:
    """Default-deny authorization decisions over a RoleRegistry."""

    def __init__(self, registry: RoleRegistry):
        self.registry = registry
        self.resolver = PermissionResolver(registry)

    def parse_role(self, role_claim) -> Optional[Role]:
        return self.registry.parse_role(role_claim)

    def resolve_permissions(self, role: Role) -> frozenset[Permission]:
        return self.resolver.resolve_permissions(role)

    def _is_superuser(self, role: Role) -> bool:
        return role is Role.ADMIN or WILDCARD_PERMISSION in self.resolve_permissions(role)

    # ── Decisions ────────────────────────────────────────────────

    def has_permission(self, role_claim, required: Permission) -> bool:
        role = self.parse_role(role_claim)
        if role is None:
            return False
        if self._is_superuser(role):
            return True
        return required in self.resolve_permissions(role)

    def has_all_permissions(self, role_claim, required: Iterable[Permission]) -> bool:
        role = self.parse_role(role_claim)
        if role is None:
            return False
        if self._is_superuser(role):
            return True
        effective = self.resolve_permissions(role)
        return all(perm in effective for perm in required)

    def has_required_role(self, role_claim, required_role) -> bool:
        """
        Caller satisfies `required_role` when it holds every permission that
        role grants directly. This is coverage, not hierarchy descent: two
        unrelated roles with overlapping permissions can satisfy each other.
        """
        role = self.parse_role(role_claim)
        target = self.parse_role(required_role)
        if role is None or target is None:
            return False
        if self._is_superuser(role):
            return True
        return self.has_all_permissions(role, self.registry[target].permissions)

    def is_manager_role(self, role_claim) -> bool:
        role = self.parse_role(role_claim)
        if role is None:
            return False
        return self.registry[role].is_manager or self._is_superuser(role)

    def compare_manager_roles(self, role_claim, required_role) -> bool:
        """Like has_required_role, but both roles must be manager tier."""
        role = self.parse_role(role_claim)
        target = self.parse_role(required_role)
        if role is None or target is None:
            return False
        if self._is_superuser(role):
            return True
        if not (self.registry[role].is_manager and self.registry[target].is_manager):
            return False
        return self.has_all_permissions(role, self.registry[target].permissions)


# ── Module-level singleton ──────────────────────────────────────
access_policy = AccessPolicy(default_registry)
