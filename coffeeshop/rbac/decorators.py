"""
Declarative authorization decorators for route handlers.

Usage:
    @router.get("/")
    @require_permission(Permission.VIEW_PRODUCTS)
    async def list_products(request: Request):
        ...

Must be applied AFTER (below) the route decorator. The handler must accept
a `request: Request` argument; AuthMiddleware has already verified the JWT
and stored the role claim on request.state.

Arguments are coerced to Permission / Role when the decorator is applied,
so a typo in an endpoint declaration fails at import time.
"""

from functools import wraps
from typing import Callable

from fastapi import HTTPException, status
from starlette.requests import Request

from coffeeshop.utils.logger import Logger
from .permissions import AccessPolicy, access_policy
from .roles import Permission, Role

logger = Logger("rbac")


def _find_request(args, kwargs) -> Request:
    request: Request | None = kwargs.get("request")
    if request is None:
        for arg in args:
            if isinstance(arg, Request):
                request = arg
                break

    if request is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Request object not found in handler",
        )
    return request


def get_access_policy(request: Request) -> AccessPolicy:
    """Policy installed on the app at startup, else the module default."""
    return getattr(request.app.state, "access_policy", None) or access_policy


def _gate(check: Callable[[AccessPolicy, str], bool], requirement: str):
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            request = _find_request(args, kwargs)
            role_claim = getattr(request.state, "role_claim", None)

            if not role_claim:
                raise HTTPException(
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    detail="Missing role claim",
                    headers={"WWW-Authenticate": "Bearer"},
                )

            if not check(get_access_policy(request), role_claim):
                logger.warning(
                    f"Denied {request.method} {request.url.path} "
                    f"for role '{role_claim}' (requires {requirement})"
                )
                raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail=f"Permission denied. Requires: {requirement}",
                )

            return await func(*args, **kwargs)

        return wrapper

    return decorator


def require_permission(permission: Permission | str):
    required = Permission(permission)
    return _gate(
        lambda policy, claim: policy.has_permission(claim, required),
        required.value,
    )


def require_permissions(*permissions: Permission | str):
    required = [Permission(p) for p in permissions]
    return _gate(
        lambda policy, claim: policy.has_all_permissions(claim, required),
        ", ".join(p.value for p in required),
    )


def require_role(role: Role | str):
    required = Role(role)
    return _gate(
        lambda policy, claim: policy.has_required_role(claim, required),
        f"role {required.value}",
    )


def require_manager_role(role: Role | str):
    required = Role(role)
    return _gate(
        lambda policy, claim: policy.compare_manager_roles(claim, required),
        f"manager role {required.value}",
    )


def require_manager(func):
    """Manager-tier gate; used bare, without arguments."""
    return _gate(
        lambda policy, claim: policy.is_manager_role(claim),
        "manager",
    )(func)
