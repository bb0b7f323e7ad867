from fastapi import APIRouter, Depends, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from coffeeshop.config import get_database
from coffeeshop.rbac import Permission
from coffeeshop.rbac.decorators import require_manager, require_permission
from coffeeshop.utils import Pagination, get_pagination, success_response
from .schemas import CreateProductRequest, UpdateProductRequest
from .service import ProductService

products_router = APIRouter()


@products_router.get("/status")
async def product_status():
    return success_response(message="Product service is up and running")


@products_router.post("/")
@require_manager
async def create_product(
    request: Request,
    body: CreateProductRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = ProductService(db)
    product = await svc.create(
        data=body.model_dump(), created_by=request.state.user.get("sub"),
    )
    return success_response(data=product, message="Product added successfully", code=201)


@products_router.get("/")
@require_permission(Permission.VIEW_PRODUCTS)
async def list_products(
    request: Request,
    pagination: Pagination = Depends(get_pagination),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = ProductService(db)
    return success_response(data=await svc.paginate(pagination))


@products_router.get("/count")
@require_permission(Permission.VIEW_PRODUCTS)
async def count_products(
    request: Request,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = ProductService(db)
    return success_response(data={"count": await svc.count()})


@products_router.get("/search/{search}")
@require_permission(Permission.VIEW_PRODUCTS)
async def search_products(
    request: Request, search: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = ProductService(db)
    return success_response(data=await svc.search(search))


@products_router.get("/{product_id}")
@require_permission(Permission.VIEW_PRODUCTS)
async def get_product(
    request: Request, product_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = ProductService(db)
    return success_response(data=await svc.get(product_id))


@products_router.put("/{product_id}")
@require_manager
async def update_product(
    request: Request, product_id: str, body: UpdateProductRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = ProductService(db)
    product = await svc.update(product_id, body.model_dump(exclude_unset=True))
    return success_response(data=product, message="Product updated")


@products_router.delete("/{product_id}")
@require_manager
async def delete_product(
    request: Request, product_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = ProductService(db)
    result = await svc.delete(product_id)
    return success_response(data=result, message="Product deleted")
