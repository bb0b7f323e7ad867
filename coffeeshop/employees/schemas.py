from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, EmailStr, field_validator

from coffeeshop.rbac import Role
from coffeeshop.utils.validators import clean_phone


class CheckinTypeEnum(str, Enum):
    IN = "in"
    OUT = "out"


class CreateEmployeeRequest(BaseModel):
    """POST /employees"""
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone_number: str = Field(..., min_length=6, max_length=15)
    role: Role = Role.EMPLOYEE
    password: str
    is_active: bool = True
    is_verified: bool = False
    is_first_time: bool = True

    @field_validator("phone_number")
    @classmethod
    def validate_phone(cls, v):
        return clean_phone(v)


class UpdateEmployeeRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone_number: Optional[str] = None
    password: Optional[str] = None

    @field_validator("phone_number")
    @classmethod
    def validate_phone(cls, v):
        return clean_phone(v)


class UpdateStatusRequest(BaseModel):
    id: str
    is_active: bool


class VerifyEmployeeRequest(BaseModel):
    id: str


class CheckinRequest(BaseModel):
    type: CheckinTypeEnum
    value: float = 0
    checkin_time: Optional[datetime] = None
