from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    """POST /auth/register"""
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str
    confirm_password: str
    confirm_tos: bool = False


class LoginRequest(BaseModel):
    """POST /auth/login"""
    email: EmailStr
    password: str
