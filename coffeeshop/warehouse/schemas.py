from typing import Optional

from pydantic import BaseModel, Field

from coffeeshop.utils.schemas import LineItem


class CreateImportRequest(BaseModel):
    """POST /warehouse/imports: goods received into stock."""
    supplier_id: Optional[str] = None
    items: list[LineItem] = Field(..., min_length=1)
    notes: Optional[str] = None


class UpdateImportRequest(BaseModel):
    supplier_id: Optional[str] = None
    items: Optional[list[LineItem]] = Field(None, min_length=1)
    notes: Optional[str] = None
