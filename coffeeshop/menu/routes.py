from fastapi import APIRouter, Depends, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from coffeeshop.config import get_database
from coffeeshop.rbac import Permission, Role
from coffeeshop.rbac.decorators import require_permission, require_role
from coffeeshop.utils import Pagination, get_pagination, success_response
from .schemas import CreateMenuItemRequest, UpdateMenuItemRequest
from .service import MenuService

menu_router = APIRouter()


@menu_router.get("/status")
async def menu_status():
    return success_response(message="Menu service is up and running")


@menu_router.post("/")
@require_role(Role.EMPLOYEE_MANAGER)
async def create_menu_item(
    request: Request,
    body: CreateMenuItemRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = MenuService(db)
    item = await svc.create(
        data=body.model_dump(), created_by=request.state.user.get("sub"),
    )
    return success_response(data=item, message="Menu item added successfully", code=201)


@menu_router.get("/")
@require_permission(Permission.VIEW_PRODUCTS)
async def list_menu_items(
    request: Request,
    pagination: Pagination = Depends(get_pagination),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = MenuService(db)
    return success_response(data=await svc.paginate(pagination))


@menu_router.get("/all")
@require_permission(Permission.VIEW_PRODUCTS)
async def all_menu_items(
    request: Request,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Whole menu, unpaginated, for the order screen."""
    svc = MenuService(db)
    return success_response(data=await svc.all())


@menu_router.get("/{item_id}")
@require_role(Role.EMPLOYEE)
async def get_menu_item(
    request: Request, item_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = MenuService(db)
    return success_response(data=await svc.get(item_id))


@menu_router.put("/{item_id}")
@require_role(Role.EMPLOYEE)
async def update_menu_item(
    request: Request, item_id: str, body: UpdateMenuItemRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = MenuService(db)
    item = await svc.update(item_id, body.model_dump(exclude_unset=True))
    return success_response(data=item, message="Menu item updated successfully")


@menu_router.delete("/{item_id}")
@require_role(Role.EMPLOYEE)
async def delete_menu_item(
    request: Request, item_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = MenuService(db)
    result = await svc.delete(item_id)
    return success_response(data=result, message="Menu item deleted successfully")
