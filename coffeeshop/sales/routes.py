from fastapi import APIRouter, Depends, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from coffeeshop.config import get_database
from coffeeshop.rbac import Role
from coffeeshop.rbac.decorators import require_role
from coffeeshop.utils import Pagination, get_pagination, success_response
from .schemas import CreateSaleRequest, UpdateSaleRequest
from .service import SaleService

sales_router = APIRouter()


@sales_router.get("/status")
async def sale_status():
    return success_response(message="Sale service is up and running")


@sales_router.post("/")
@require_role(Role.EMPLOYEE)
async def create_sale(
    request: Request,
    body: CreateSaleRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Ring up a sale. An expired voucher is rejected, an unknown one is 404."""
    svc = SaleService(db)
    sale = await svc.create(
        data=body.model_dump(), created_by=request.state.user.get("sub"),
    )
    return success_response(data=sale, message="Sale recorded", code=201)


@sales_router.get("/")
@require_role(Role.EMPLOYEE)
async def list_sales(
    request: Request,
    pagination: Pagination = Depends(get_pagination),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = SaleService(db)
    return success_response(data=await svc.paginate(pagination))


@sales_router.get("/{sale_id}")
@require_role(Role.EMPLOYEE)
async def get_sale(
    request: Request, sale_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = SaleService(db)
    return success_response(data=await svc.get(sale_id))


@sales_router.put("/{sale_id}")
@require_role(Role.EMPLOYEE)
async def update_sale(
    request: Request, sale_id: str, body: UpdateSaleRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = SaleService(db)
    sale = await svc.update(sale_id, body.model_dump(exclude_unset=True))
    return success_response(data=sale, message="Sale updated")


@sales_router.delete("/{sale_id}")
@require_role(Role.EMPLOYEE)
async def delete_sale(
    request: Request, sale_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = SaleService(db)
    result = await svc.delete(sale_id)
    return success_response(data=result, message="Sale deleted successfully")
