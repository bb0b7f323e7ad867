from typing import Optional

from pydantic import BaseModel, Field

from coffeeshop.utils.schemas import LineItem


class CreateSaleRequest(BaseModel):
    """POST /sales: a counter sale, optionally discounted by a voucher."""
    customer_id: Optional[str] = None
    voucher_id: Optional[str] = None
    items: list[LineItem] = Field(..., min_length=1)


class UpdateSaleRequest(BaseModel):
    customer_id: Optional[str] = None
    voucher_id: Optional[str] = None
    items: Optional[list[LineItem]] = Field(None, min_length=1)
