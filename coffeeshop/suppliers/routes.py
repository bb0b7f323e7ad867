from fastapi import APIRouter, Depends, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from coffeeshop.config import get_database
from coffeeshop.rbac import Permission, Role
from coffeeshop.rbac.decorators import require_permission, require_role
from coffeeshop.utils import Pagination, get_pagination, success_response
from .schemas import CreateSupplierRequest, UpdateSupplierRequest
from .service import SupplierService

suppliers_router = APIRouter()


@suppliers_router.get("/status")
async def supplier_status():
    return success_response(message="Supplier service is up and running")


@suppliers_router.post("/")
@require_role(Role.EMPLOYEE_MANAGER)
async def create_supplier(
    request: Request,
    body: CreateSupplierRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Create a new supplier."""
    svc = SupplierService(db)
    supplier = await svc.create(
        data=body.model_dump(), created_by=request.state.user.get("sub"),
    )
    return success_response(data=supplier, message="Supplier added successfully", code=201)


@suppliers_router.get("/")
@require_permission(Permission.VIEW_SUPPLIERS)
async def list_suppliers(
    request: Request,
    pagination: Pagination = Depends(get_pagination),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = SupplierService(db)
    return success_response(data=await svc.paginate(pagination))


@suppliers_router.get("/all")
@require_role(Role.EMPLOYEE)
async def all_suppliers(
    request: Request,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = SupplierService(db)
    return success_response(data=await svc.all())


@suppliers_router.get("/{supplier_id}")
@require_role(Role.EMPLOYEE)
async def get_supplier(
    request: Request, supplier_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = SupplierService(db)
    return success_response(data=await svc.get(supplier_id))


@suppliers_router.put("/{supplier_id}")
@require_role(Role.EMPLOYEE)
async def update_supplier(
    request: Request, supplier_id: str, body: UpdateSupplierRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = SupplierService(db)
    supplier = await svc.update(supplier_id, body.model_dump(exclude_unset=True))
    return success_response(data=supplier, message="Supplier updated successfully")


@suppliers_router.delete("/{supplier_id}")
@require_role(Role.EMPLOYEE)
async def delete_supplier(
    request: Request, supplier_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Soft-delete a supplier by ID."""
    svc = SupplierService(db)
    result = await svc.delete(supplier_id)
    return success_response(data=result, message="Supplier deleted successfully")
