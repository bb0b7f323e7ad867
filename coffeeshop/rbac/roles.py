"""
Role definitions and the role registry.

Roles and permissions are closed enumerations. Each role carries a set of
direct permissions and may inherit every permission of one or more other
roles. Admin holds the wildcard permission MANAGE_ALL, which satisfies any
permission check.

Role claims in JWTs use the Role values ("Admin", "Employee", ...).
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Iterator, Mapping, Optional

from coffeeshop.utils.logger import Logger

logger = Logger("rbac")


class Role(str, Enum):
    ADMIN = "Admin"
    EMPLOYEE = "Employee"
    ACCOUNTING = "Accounting"
    WAREHOUSE_MANAGER = "WarehouseManager"
    EMPLOYEE_MANAGER = "EmployeeManager"
    CUSTOMER = "Customer"


class Permission(str, Enum):
    # Admin
    MANAGE_ALL = "manage_all"

    # Managers
    VIEW_ALL_REPORTS = "view_all_reports"

    # Warehouse
    MANAGE_WAREHOUSE = "manage_warehouse"
    MANAGE_INVENTORY = "manage_inventory"
    VIEW_WAREHOUSE_REPORTS = "view_warehouse_reports"

    # Employee management
    MANAGE_EMPLOYEES = "manage_employees"
    VIEW_EMPLOYEES = "view_employees"
    MANAGE_SCHEDULES = "manage_schedules"
    VIEW_EMPLOYEE_RECORDS = "view_employee_records"

    # Employees
    VIEW_OWN_PROFILE = "view_own_profile"
    SUBMIT_REPORTS = "submit_reports"

    # Customers
    VIEW_PRODUCTS = "view_products"
    PLACE_ORDERS = "place_orders"

    # Suppliers
    MANAGE_SUPPLIERS = "manage_suppliers"
    VIEW_SUPPLIERS = "view_suppliers"


WILDCARD_PERMISSION = Permission.MANAGE_ALL


class RoleRegistryError(ValueError):
    """Raised when a role table is malformed (dangling reference, cycle...)."""


@dataclass(frozen=True)
class RoleDefinition:
    is_manager: bool = False
    permissions: frozenset = field(default_factory=frozenset)
    inherits_from: tuple = ()

    def __post_init__(self):
        # Accept any iterable from callers, store immutable copies
        object.__setattr__(self, "permissions", frozenset(self.permissions))
        object.__setattr__(self, "inherits_from", tuple(self.inherits_from))


class RoleRegistry(Mapping):
    """
    Immutable mapping Role -> RoleDefinition.

    Validated eagerly on construction so that a bad role table aborts
    startup instead of surfacing during request handling:
      - keys must be Role members
      - direct permissions must be Permission members
      - inherited roles must exist in the registry
      - the inheritance graph must be acyclic
    """

    def __init__(self, definitions: Mapping[Role, RoleDefinition]):
        self._definitions = MappingProxyType(dict(definitions))
        self._validate()
        logger.debug(f"Loaded role registry with {len(self._definitions)} roles")

    # ── Mapping protocol ─────────────────────────────────────────

    def __getitem__(self, role: Role) -> RoleDefinition:
        return self._definitions[role]

    def __iter__(self) -> Iterator[Role]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def __repr__(self) -> str:
        return f"RoleRegistry({[r.value for r in self._definitions]})"

    # ── Boundary parsing ─────────────────────────────────────────

    def parse_role(self, claim) -> Optional[Role]:
        """
        Turn an untrusted role claim into a Role known to this registry.

        Returns None for anything else (unknown string, empty, wrong type).
        Never raises.
        """
        if isinstance(claim, Role):
            role = claim
        elif isinstance(claim, str):
            try:
                role = Role(claim)
            except ValueError:
                return None
        else:
            return None
        return role if role in self._definitions else None

    # ── Validation ───────────────────────────────────────────────

    def _validate(self) -> None:
        for role, definition in self._definitions.items():
            if not isinstance(role, Role):
                raise RoleRegistryError(f"Unknown role key: {role!r}")
            if not isinstance(definition, RoleDefinition):
                raise RoleRegistryError(
                    f"Definition for {role.value} must be a RoleDefinition"
                )
            for perm in definition.permissions:
                if not isinstance(perm, Permission):
                    raise RoleRegistryError(
                        f"Role {role.value} references unknown permission {perm!r}"
                    )
            for parent in definition.inherits_from:
                if parent not in self._definitions:
                    raise RoleRegistryError(
                        f"Role {role.value} inherits from unknown role {parent!r}"
                    )
        self._check_acyclic()

    def _check_acyclic(self) -> None:
        # Iterative DFS with white/grey/black colouring
        done: set[Role] = set()
        for start in self._definitions:
            if start in done:
                continue
            on_path: list[Role] = [start]
            stack = [(start, iter(self._definitions[start].inherits_from))]
            while stack:
                node, parents = stack[-1]
                parent = next(parents, None)
                if parent is None:
                    stack.pop()
                    on_path.pop()
                    done.add(node)
                    continue
                if parent in done:
                    continue
                if parent in on_path:
                    cycle = on_path[on_path.index(parent):] + [parent]
                    raise RoleRegistryError(
                        "Role inheritance cycle: "
                        + " -> ".join(r.value for r in cycle)
                    )
                on_path.append(parent)
                stack.append((parent, iter(self._definitions[parent].inherits_from)))


ROLE_DEFINITIONS: dict[Role, RoleDefinition] = {
    Role.ADMIN: RoleDefinition(
        is_manager=False,  # Admin passes manager gates through the wildcard instead
        permissions={Permission.MANAGE_ALL},
    ),
    Role.ACCOUNTING: RoleDefinition(
        is_manager=True,
        permissions={
            Permission.VIEW_ALL_REPORTS,
            Permission.VIEW_EMPLOYEE_RECORDS,
            Permission.VIEW_WAREHOUSE_REPORTS,
            Permission.VIEW_SUPPLIERS,
        },
    ),
    Role.WAREHOUSE_MANAGER: RoleDefinition(
        is_manager=True,
        permissions={
            Permission.MANAGE_WAREHOUSE,
            Permission.MANAGE_INVENTORY,
            Permission.VIEW_WAREHOUSE_REPORTS,
            Permission.VIEW_ALL_REPORTS,
            Permission.MANAGE_SUPPLIERS,
            Permission.VIEW_SUPPLIERS,
        },
    ),
    Role.EMPLOYEE_MANAGER: RoleDefinition(
        is_manager=True,
        inherits_from=(Role.EMPLOYEE,),
        permissions={
            Permission.MANAGE_EMPLOYEES,
            Permission.MANAGE_SCHEDULES,
            Permission.VIEW_EMPLOYEE_RECORDS,
            Permission.VIEW_ALL_REPORTS,
        },
    ),
    Role.EMPLOYEE: RoleDefinition(
        is_manager=False,
        inherits_from=(Role.CUSTOMER,),
        permissions={
            Permission.VIEW_OWN_PROFILE,
            Permission.SUBMIT_REPORTS,
            Permission.VIEW_SUPPLIERS,
        },
    ),
    Role.CUSTOMER: RoleDefinition(
        is_manager=False,
        permissions={Permission.VIEW_PRODUCTS, Permission.PLACE_ORDERS},
    ),
}


# ── Module-level singleton ──────────────────────────────────────
default_registry = RoleRegistry(ROLE_DEFINITIONS)
