from fastapi import APIRouter, Depends, Request, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from coffeeshop.config import get_database
from coffeeshop.rbac import Role
from coffeeshop.rbac.decorators import require_role
from coffeeshop.utils import Pagination, get_pagination, success_response
from .schemas import CreateCustomerRequest, UpdateCustomerRequest
from .service import CustomerService

customers_router = APIRouter()


@customers_router.get("/status")
async def customer_status():
    return success_response(message="Customer service is up and running")


@customers_router.post("/")
@require_role(Role.EMPLOYEE)
async def create_customer(
    request: Request,
    body: CreateCustomerRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Create a new customer."""
    svc = CustomerService(db)
    customer = await svc.create(
        data=body.model_dump(), created_by=request.state.user.get("sub"),
    )
    return success_response(data=customer, message="Customer added successfully", code=201)


@customers_router.get("/")
@require_role(Role.EMPLOYEE)
async def list_customers(
    request: Request,
    pagination: Pagination = Depends(get_pagination),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Paginated customer list, newest first."""
    svc = CustomerService(db)
    return success_response(data=await svc.paginate(pagination))


@customers_router.get("/search")
@require_role(Role.EMPLOYEE)
async def search_customers(
    request: Request,
    search: str = Query(""),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Case-insensitive search on name and phone number."""
    svc = CustomerService(db)
    return success_response(data=await svc.search(search))


@customers_router.get("/{customer_id}")
@require_role(Role.EMPLOYEE)
async def get_customer(
    request: Request, customer_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = CustomerService(db)
    return success_response(data=await svc.get(customer_id))


@customers_router.put("/{customer_id}")
@require_role(Role.EMPLOYEE)
async def update_customer(
    request: Request, customer_id: str, body: UpdateCustomerRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = CustomerService(db)
    customer = await svc.update(customer_id, body.model_dump(exclude_unset=True))
    return success_response(data=customer, message="Customer updated")


@customers_router.delete("/{customer_id}")
@require_role(Role.EMPLOYEE)
async def delete_customer(
    request: Request, customer_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Soft-delete a customer by ID."""
    svc = CustomerService(db)
    result = await svc.delete(customer_id)
    return success_response(data=result, message="Customer deleted")
