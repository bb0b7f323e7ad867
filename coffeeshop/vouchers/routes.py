from fastapi import APIRouter, Depends, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from coffeeshop.config import get_database
from coffeeshop.rbac import Role
from coffeeshop.rbac.decorators import require_role
from coffeeshop.utils import Pagination, get_pagination, success_response
from .schemas import CreateVoucherRequest, UpdateVoucherRequest
from .service import VoucherService

vouchers_router = APIRouter()


@vouchers_router.get("/status")
async def voucher_status():
    return success_response(message="Voucher service is up and running")


@vouchers_router.post("/")
@require_role(Role.EMPLOYEE)
async def create_voucher(
    request: Request,
    body: CreateVoucherRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = VoucherService(db)
    voucher = await svc.create(
        data=body.model_dump(), created_by=request.state.user.get("sub"),
    )
    return success_response(data=voucher, message="Voucher added successfully", code=201)


@vouchers_router.get("/")
@require_role(Role.EMPLOYEE)
async def list_vouchers(
    request: Request,
    pagination: Pagination = Depends(get_pagination),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = VoucherService(db)
    return success_response(data=await svc.paginate(pagination))


@vouchers_router.get("/{voucher_id}")
@require_role(Role.EMPLOYEE)
async def get_voucher(
    request: Request, voucher_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = VoucherService(db)
    return success_response(data=await svc.get(voucher_id))


@vouchers_router.put("/{voucher_id}")
@require_role(Role.EMPLOYEE)
async def update_voucher(
    request: Request, voucher_id: str, body: UpdateVoucherRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = VoucherService(db)
    voucher = await svc.update(voucher_id, body.model_dump(exclude_unset=True))
    return success_response(data=voucher, message="Voucher updated")


@vouchers_router.delete("/{voucher_id}")
@require_role(Role.EMPLOYEE)
async def delete_voucher(
    request: Request, voucher_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = VoucherService(db)
    result = await svc.delete(voucher_id)
    return success_response(data=result, message="Voucher deleted successfully")
