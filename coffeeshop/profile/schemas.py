"""
Profile schemas: self-service for the signed-in account.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional

from coffeeshop.utils.validators import clean_phone


class UpdateProfileRequest(BaseModel):
    """PUT /profile/me"""
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    phone_number: Optional[str] = Field(None, max_length=15)
    avatar_path: Optional[str] = Field(None, max_length=500)

    @field_validator("phone_number")
    @classmethod
    def validate_phone(cls, v):
        return clean_phone(v)


class ChangePasswordRequest(BaseModel):
    """POST /profile/change-password"""
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8, max_length=128)
    confirm_password: str = Field(..., min_length=8, max_length=128)
