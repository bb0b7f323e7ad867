from typing import Optional

from pydantic import BaseModel, Field

from coffeeshop.utils.schemas import LineItem


class CreateExportRequest(BaseModel):
    """POST /exports: goods taken out of the warehouse."""
    items: list[LineItem] = Field(..., min_length=1)
    destination: Optional[str] = None
    notes: Optional[str] = None
