from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from coffeeshop.config import get_database
from coffeeshop.utils import success_response
from .schemas import LoginRequest, RegisterRequest
from .service import AuthService

auth_router = APIRouter()


@auth_router.post("/register")
async def register(
    body: RegisterRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Create a customer account."""
    svc = AuthService(db)
    result = await svc.register(body.model_dump())
    return success_response(data=result, message="Account created", code=201)


@auth_router.post("/login")
async def login(
    body: LoginRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Authenticate an account and return a JWT."""
    svc = AuthService(db)
    result = await svc.authenticate(email=body.email, password=body.password)
    return success_response(data=result, message="Login success")


@auth_router.get("/status")
async def auth_status():
    return success_response(message="Auth service is up and running")
