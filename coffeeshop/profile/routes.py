"""
Profile routes: the caller's own record, identified by the token subject.

Endpoints:
    GET    /me                  Get own profile
    PUT    /me                  Update own profile (name, phone, avatar)
    POST   /change-password     Change own password
"""

from fastapi import APIRouter, Depends, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from coffeeshop.config import get_database
from coffeeshop.rbac import Permission
from coffeeshop.rbac.decorators import require_permission
from coffeeshop.utils import success_response
from coffeeshop.utils.exceptions import AuthenticationError
from .schemas import ChangePasswordRequest, UpdateProfileRequest
from .service import ProfileService

profile_router = APIRouter()


def _user_id(request: Request) -> str:
    user_id = getattr(request.state, "user", {}).get("sub")
    if not user_id:
        raise AuthenticationError("Authentication context not found")
    return user_id


@profile_router.get("/status")
async def profile_status():
    return success_response(message="Profile service is up and running")


@profile_router.get("/me")
@require_permission(Permission.VIEW_OWN_PROFILE)
async def get_my_profile(
    request: Request,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = ProfileService(db)
    return success_response(data=await svc.get_profile(_user_id(request)))


@profile_router.put("/me")
@require_permission(Permission.VIEW_OWN_PROFILE)
async def update_my_profile(
    request: Request,
    body: UpdateProfileRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Email and role cannot be changed through this endpoint."""
    svc = ProfileService(db)
    profile = await svc.update_profile(
        _user_id(request), body.model_dump(exclude_unset=True)
    )
    return success_response(data=profile, message="Profile updated")


@profile_router.post("/change-password")
@require_permission(Permission.VIEW_OWN_PROFILE)
async def change_password(
    request: Request,
    body: ChangePasswordRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = ProfileService(db)
    result = await svc.change_password(
        _user_id(request), body.current_password, body.new_password, body.confirm_password,
    )
    return success_response(data=result, message="Password changed successfully")
