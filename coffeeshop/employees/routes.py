from fastapi import APIRouter, Depends, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from coffeeshop.config import get_database
from coffeeshop.rbac import Permission, Role
from coffeeshop.rbac.decorators import (
    get_access_policy,
    require_manager,
    require_permission,
    require_role,
)
from coffeeshop.utils import Pagination, get_pagination, success_response
from coffeeshop.utils.exceptions import ForbiddenError
from .schemas import (
    CheckinRequest,
    CreateEmployeeRequest,
    UpdateEmployeeRequest,
    UpdateStatusRequest,
    VerifyEmployeeRequest,
)
from .service import EmployeeService

employees_router = APIRouter()


@employees_router.get("/status")
async def employee_status():
    return success_response(message="Employee service is up and running")


@employees_router.post("/")
@require_role(Role.EMPLOYEE_MANAGER)
async def create_employee(
    request: Request,
    body: CreateEmployeeRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    Create an employee account.

    The caller can only hand out a role whose permissions it already
    covers, so an EmployeeManager cannot mint an Admin.
    """
    policy = get_access_policy(request)
    if not policy.has_required_role(request.state.role_claim, body.role):
        raise ForbiddenError(f"Cannot assign role {body.role.value}")

    svc = EmployeeService(db)
    employee = await svc.create(
        data=body.model_dump(), created_by=request.state.user.get("sub"),
    )
    return success_response(data=employee, message="Employee added successfully", code=201)


@employees_router.get("/")
@require_permission(Permission.VIEW_EMPLOYEES)
async def list_employees(
    request: Request,
    pagination: Pagination = Depends(get_pagination),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = EmployeeService(db)
    return success_response(data=await svc.paginate(pagination))


@employees_router.get("/count")
@require_permission(Permission.VIEW_EMPLOYEES)
async def count_employees(
    request: Request,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = EmployeeService(db)
    return success_response(data={"count": await svc.count()})


@employees_router.get("/search/{search}")
@require_role(Role.EMPLOYEE)
async def search_employees(
    request: Request, search: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = EmployeeService(db)
    return success_response(data=await svc.search(search))


@employees_router.post("/update-status")
@require_manager
async def update_employee_status(
    request: Request,
    body: UpdateStatusRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Activate or deactivate an employee."""
    svc = EmployeeService(db)
    employee = await svc.set_active(body.id, body.is_active)
    return success_response(data=employee, message="Employee status updated")


@employees_router.post("/verify")
@require_manager
async def verify_employee(
    request: Request,
    body: VerifyEmployeeRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = EmployeeService(db)
    employee = await svc.verify(body.id)
    return success_response(data=employee, message="Employee verified successfully")


@employees_router.get("/{employee_id}")
@require_role(Role.EMPLOYEE)
async def get_employee(
    request: Request, employee_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = EmployeeService(db)
    return success_response(data=await svc.get(employee_id))


@employees_router.put("/{employee_id}")
@require_permission(Permission.MANAGE_EMPLOYEES)
async def update_employee(
    request: Request, employee_id: str, body: UpdateEmployeeRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = EmployeeService(db)
    employee = await svc.update(employee_id, body.model_dump(exclude_unset=True))
    return success_response(data=employee, message="Employee updated successfully")


@employees_router.delete("/{employee_id}")
@require_permission(Permission.MANAGE_EMPLOYEES)
async def delete_employee(
    request: Request, employee_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = EmployeeService(db)
    result = await svc.delete(employee_id)
    return success_response(data=result, message="Employee deleted successfully")


@employees_router.post("/{employee_id}/checkins")
@require_role(Role.EMPLOYEE)
async def add_checkin(
    request: Request, employee_id: str, body: CheckinRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Record a clock-in or clock-out."""
    svc = EmployeeService(db)
    checkin = await svc.add_checkin(employee_id, body.model_dump())
    return success_response(data=checkin, message="Check-in recorded", code=201)


@employees_router.get("/{employee_id}/checkins")
@require_role(Role.EMPLOYEE)
async def list_checkins(
    request: Request, employee_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = EmployeeService(db)
    return success_response(data=await svc.list_checkins(employee_id))
