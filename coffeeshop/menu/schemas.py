from pydantic import BaseModel, Field
from typing import Optional


class CreateMenuItemRequest(BaseModel):
    """POST /menu"""
    name: str = Field(..., min_length=1, max_length=200)
    type: str = Field(..., min_length=1, max_length=50, description="e.g. coffee, tea, pastry")
    price: float = Field(..., ge=0)
    is_available: bool = True


class UpdateMenuItemRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    type: Optional[str] = Field(None, min_length=1, max_length=50)
    price: Optional[float] = Field(None, ge=0)
    is_available: Optional[bool] = None
