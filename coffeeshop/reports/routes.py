from fastapi import APIRouter, Depends, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from coffeeshop.config import get_database
from coffeeshop.rbac import Permission
from coffeeshop.rbac.decorators import require_permission
from coffeeshop.utils import success_response
from .service import ReportsService

reports_router = APIRouter()


@reports_router.get("/status")
async def report_status():
    return success_response(message="Report service is up and running")


@reports_router.get("/summary")
@require_permission(Permission.VIEW_ALL_REPORTS)
async def summary(
    request: Request,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Customer, employee, product and sale counts plus total revenue."""
    svc = ReportsService(db)
    return success_response(data=await svc.summary())
