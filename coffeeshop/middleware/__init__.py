"""
Authentication middleware.

Runs on every request (except PUBLIC_ROUTES):
  1. Require an `Authorization: Bearer <token>` header
  2. Verify the JWT signature and expiry
  3. Set request.state.user and request.state.role_claim

Authorization itself happens per route in coffeeshop.rbac.decorators;
this layer only answers "who is calling".
"""

from fastapi import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from coffeeshop.auth.helpers import decode_access_token
from coffeeshop.utils import Logger

logger = Logger("auth.middleware")


# Routes that skip authentication
PUBLIC_ROUTES = [
    "/auth/login",
    "/auth/register",
    "/status",
    "/health",
    "/openapi.json",
    "/api/docs",
    "/redoc",
]


def _unauthorized(detail: str) -> JSONResponse:
    return JSONResponse(
        status_code=401,
        content={"detail": detail},
        headers={"WWW-Authenticate": "Bearer"},
    )


class AuthMiddleware(BaseHTTPMiddleware):
    """Verifies the bearer JWT and exposes its claims on request.state."""

    async def dispatch(self, request: Request, call_next):
        # ── Preflight ────────────────────────────────────────────
        if request.method == "OPTIONS":
            return await call_next(request)

        path = request.url.path.rstrip("/")

        # ── Skip public routes ───────────────────────────────────
        if path == "" or any(path.endswith(route) for route in PUBLIC_ROUTES):
            return await call_next(request)

        # ── Extract & decode JWT ─────────────────────────────────
        auth_header = request.headers.get("Authorization")
        if not auth_header:
            return _unauthorized("Missing Authorization header")

        if not auth_header.startswith("Bearer "):
            return _unauthorized("Invalid token format. Expected 'Bearer <token>'")

        token = auth_header.split(" ", 1)[1].strip()

        try:
            payload = decode_access_token(token)
        except HTTPException as e:
            logger.debug(f"Rejected token on {request.method} {path}")
            return _unauthorized(e.detail)

        # ── Populate request.state ───────────────────────────────
        request.state.user = payload
        request.state.role_claim = payload.get("role")

        return await call_next(request)
