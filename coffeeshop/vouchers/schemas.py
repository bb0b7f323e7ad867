from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class CreateVoucherRequest(BaseModel):
    """POST /vouchers"""
    name: str = Field(..., min_length=1, max_length=100)
    value: float = Field(..., ge=0, description="Flat discount taken off a sale")
    expiry_date: datetime


class UpdateVoucherRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    value: Optional[float] = Field(None, ge=0)
    expiry_date: Optional[datetime] = None
