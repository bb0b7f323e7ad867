from fastapi import APIRouter, Depends, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from coffeeshop.config import get_database
from coffeeshop.rbac import Role
from coffeeshop.rbac.decorators import require_role
from coffeeshop.utils import Pagination, get_pagination, success_response
from .schemas import CreateExportRequest
from .service import ExportService

exports_router = APIRouter()


@exports_router.get("/status")
async def export_status():
    return success_response(message="Export service is up and running")


@exports_router.post("/")
@require_role(Role.WAREHOUSE_MANAGER)
async def create_export(
    request: Request,
    body: CreateExportRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = ExportService(db)
    record = await svc.create(
        data=body.model_dump(), created_by=request.state.user.get("sub"),
    )
    return success_response(data=record, message="Export recorded", code=201)


@exports_router.get("/")
@require_role(Role.WAREHOUSE_MANAGER)
async def list_exports(
    request: Request,
    pagination: Pagination = Depends(get_pagination),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = ExportService(db)
    return success_response(data=await svc.paginate(pagination))


@exports_router.get("/{export_id}")
@require_role(Role.WAREHOUSE_MANAGER)
async def get_export(
    request: Request, export_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = ExportService(db)
    return success_response(data=await svc.get(export_id))


@exports_router.delete("/{export_id}")
@require_role(Role.WAREHOUSE_MANAGER)
async def delete_export(
    request: Request, export_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Cancel an export and put its goods back into stock."""
    svc = ExportService(db)
    result = await svc.delete(export_id)
    return success_response(data=result, message="Export deleted successfully")
