from pydantic import BaseModel, Field
from typing import Optional


class CreateProductRequest(BaseModel):
    """POST /products"""
    name: str = Field(..., min_length=1, max_length=200)
    price: float = Field(..., ge=0)
    unit: str = Field(..., min_length=1, max_length=30, description="e.g. kg, bag, bottle")
    description: str = Field(default="", max_length=1000)
    is_available: bool = True


class UpdateProductRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    price: Optional[float] = Field(None, ge=0)
    unit: Optional[str] = Field(None, min_length=1, max_length=30)
    description: Optional[str] = Field(None, max_length=1000)
    is_available: Optional[bool] = None
