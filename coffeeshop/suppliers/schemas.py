"""
Supplier schemas.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional

from coffeeshop.utils.validators import clean_phone


class CreateSupplierRequest(BaseModel):
    """POST /suppliers"""
    name: str = Field(..., min_length=1, max_length=200, description="Business / supplier name")
    field: str = Field(..., min_length=1, max_length=100, description="What they supply, e.g. dairy")
    phone: str = Field(..., min_length=6, max_length=15)
    address: str = Field(..., min_length=3, max_length=300)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        return clean_phone(v)


class UpdateSupplierRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    field: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = None
    address: Optional[str] = Field(None, min_length=3, max_length=300)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        return clean_phone(v)
