from pydantic import BaseModel, Field, EmailStr, field_validator
from typing import Optional

from coffeeshop.utils.validators import clean_phone


class CreateCustomerRequest(BaseModel):
    """POST /customers"""
    name: str = Field(..., min_length=1, max_length=200)
    phone_number: str = Field(..., min_length=6, max_length=15)
    email: Optional[EmailStr] = None

    @field_validator("phone_number")
    @classmethod
    def validate_phone(cls, v):
        return clean_phone(v)


class UpdateCustomerRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    phone_number: Optional[str] = Field(None, min_length=6, max_length=15)
    email: Optional[EmailStr] = None

    @field_validator("phone_number")
    @classmethod
    def validate_phone(cls, v):
        return clean_phone(v)
