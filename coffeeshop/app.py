"""
Coffeeshop Manager: main application.

Assembles config, middleware, the access policy and every resource router.
"""

import time
import traceback
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from coffeeshop.config import settings, db_manager
from coffeeshop.middleware import AuthMiddleware
from coffeeshop.rbac import AccessPolicy, access_policy
from coffeeshop.utils import Logger

# ── Route imports ────────────────────────────────────────────────
from coffeeshop.auth import auth_router
from coffeeshop.profile import profile_router
from coffeeshop.customers import customers_router
from coffeeshop.employees import employees_router
from coffeeshop.products import products_router
from coffeeshop.menu import menu_router
from coffeeshop.suppliers import suppliers_router
from coffeeshop.warehouse import warehouse_router
from coffeeshop.exports import exports_router
from coffeeshop.sales import sales_router
from coffeeshop.vouchers import vouchers_router
from coffeeshop.reports import reports_router

logger = Logger("request")


# ── Request Logging Middleware ───────────────────────────────────
class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs every request: method, path, status code, and duration."""

    async def dispatch(self, request: Request, call_next):
        start = time.time()
        method = request.method
        path = request.url.path
        client = request.client.host if request.client else "unknown"

        logger.info(f"--> {method} {path} (from {client})")

        try:
            response = await call_next(request)
        except Exception as exc:
            duration = round((time.time() - start) * 1000, 2)
            logger.error(f"<-- {method} {path} | 500 | {duration}ms")
            logger.exception(f"    Exception: {exc}")
            raise

        duration = round((time.time() - start) * 1000, 2)
        status = response.status_code

        if status >= 500:
            logger.error(f"<-- {method} {path} | {status} | {duration}ms")
        elif status >= 400:
            logger.warning(f"<-- {method} {path} | {status} | {duration}ms")
        else:
            logger.info(f"<-- {method} {path} | {status} | {duration}ms")

        return response


# ── Lifespan ─────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    await db_manager.connect()
    yield
    db_manager.close()


ROUTERS = [
    (auth_router, "auth", "Authentication"),
    (profile_router, "profile", "Profile & Password"),
    (customers_router, "customers", "Customers"),
    (employees_router, "employees", "Employees"),
    (products_router, "products", "Products"),
    (menu_router, "menu", "Menu"),
    (suppliers_router, "suppliers", "Suppliers"),
    (warehouse_router, "warehouse", "Warehouse"),
    (exports_router, "exports", "Exports"),
    (sales_router, "sales", "Sales"),
    (vouchers_router, "vouchers", "Vouchers"),
    (reports_router, "reports", "Reports"),
]


# ── App factory ──────────────────────────────────────────────────
def create_app(policy: Optional[AccessPolicy] = None, use_lifespan: bool = True) -> FastAPI:
    """
    Build the application.

    `policy` replaces the default role table for every route gate; tests
    pass `use_lifespan=False` to run without a MongoDB connection.
    """
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Coffee shop back office with role-based access control",
        docs_url="/api/docs",
        lifespan=lifespan if use_lifespan else None,
    )
    app.state.access_policy = policy or access_policy

    # ── CORS (must be first) ─────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allowed_methods,
        allow_headers=settings.cors_allowed_headers,
    )

    # ── Request logging (runs on every request) ──────────────
    app.add_middleware(RequestLoggingMiddleware)

    # ── Bearer token authentication ──────────────────────────
    app.add_middleware(AuthMiddleware)

    # ── Global exception handler ─────────────────────────────
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception on {request.method} {request.url.path}:")
        logger.error(traceback.format_exc())
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": {
                    "code": 500,
                    "message": str(exc) if settings.debug else "Internal server error",
                },
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        )

    # ── Routes ───────────────────────────────────────────────
    v = settings.api_version  # "v1"

    for router, prefix, tag in ROUTERS:
        app.include_router(router, prefix=f"/api/{v}/{prefix}", tags=[tag])

    # ── Health check ─────────────────────────────────────────
    @app.get("/health")
    async def health():
        return {
            "status": "healthy",
            "app": settings.app_name,
            "version": settings.app_version,
            "database": db_manager.is_connected,
        }

    return app


# ── Create the app instance ──────────────────────────────────────
app = create_app()
