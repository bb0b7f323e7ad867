from fastapi import APIRouter, Depends, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from coffeeshop.config import get_database
from coffeeshop.rbac import Permission, Role
from coffeeshop.rbac.decorators import require_permission, require_role
from coffeeshop.utils import Pagination, get_pagination, success_response
from .schemas import CreateImportRequest, UpdateImportRequest
from .service import StockService, WarehouseService

warehouse_router = APIRouter()


@warehouse_router.get("/status")
async def warehouse_status():
    return success_response(message="Warehouse service is up and running")


# ══════════════════════════════════════════════════════════════════
# IMPORTS
# ══════════════════════════════════════════════════════════════════

@warehouse_router.post("/imports")
@require_role(Role.WAREHOUSE_MANAGER)
async def create_import(
    request: Request,
    body: CreateImportRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Record received goods and add them to stock."""
    svc = WarehouseService(db)
    record = await svc.create(
        data=body.model_dump(), created_by=request.state.user.get("sub"),
    )
    return success_response(data=record, message="Import recorded", code=201)


@warehouse_router.get("/imports")
@require_role(Role.WAREHOUSE_MANAGER)
async def list_imports(
    request: Request,
    pagination: Pagination = Depends(get_pagination),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = WarehouseService(db)
    return success_response(data=await svc.paginate(pagination))


@warehouse_router.get("/imports/{import_id}")
@require_role(Role.WAREHOUSE_MANAGER)
async def get_import(
    request: Request, import_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = WarehouseService(db)
    return success_response(data=await svc.get(import_id))


@warehouse_router.put("/imports/{import_id}")
@require_role(Role.WAREHOUSE_MANAGER)
async def update_import(
    request: Request, import_id: str, body: UpdateImportRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = WarehouseService(db)
    record = await svc.update(import_id, body.model_dump(exclude_unset=True))
    return success_response(data=record, message="Import updated")


@warehouse_router.delete("/imports/{import_id}")
@require_role(Role.WAREHOUSE_MANAGER)
async def delete_import(
    request: Request, import_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = WarehouseService(db)
    result = await svc.delete(import_id)
    return success_response(data=result, message="Import deleted successfully")


# ══════════════════════════════════════════════════════════════════
# STOCK
# ══════════════════════════════════════════════════════════════════

@warehouse_router.get("/stock")
@require_permission(Permission.MANAGE_INVENTORY)
async def list_stock(
    request: Request,
    pagination: Pagination = Depends(get_pagination),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = StockService(db)
    return success_response(data=await svc.paginate(pagination))


@warehouse_router.get("/stock/{stock_id}")
@require_permission(Permission.MANAGE_INVENTORY)
async def get_stock_item(
    request: Request, stock_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = StockService(db)
    return success_response(data=await svc.get(stock_id))
