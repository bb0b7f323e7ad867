"""
Sales service.

A sale's total_value is the sum of price × quant over its lines. When a
voucher is attached its flat value comes off the total, never below zero.
The discount is stored on the sale so later edits keep it even after the
voucher expires.
"""

from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from coffeeshop.utils.service import CollectionService
from coffeeshop.vouchers.service import VoucherService


def total_value(items: list[dict]) -> float:
    return sum(line["price"] * line["quant"] for line in items)


def _totals(items: list[dict], discount: float) -> dict:
    total = total_value(items)
    return {
        "total_value": total,
        "discount": discount,
        "final_value": max(total - discount, 0),
    }


class SaleService(CollectionService):
    collection_name = "sales"
    label = "Sale"

    def __init__(self, db: AsyncIOMotorDatabase):
        super().__init__(db)
        self.vouchers = VoucherService(db)

    async def _discount(self, voucher_id: Optional[str]) -> float:
        if not voucher_id:
            return 0.0
        return await self.vouchers.redeemable_value(voucher_id)

    async def create(self, data: dict, created_by: str | None = None) -> dict:
        discount = await self._discount(data.get("voucher_id"))
        data = {**data, **_totals(data["items"], discount)}
        return await super().create(data, created_by=created_by)

    async def update(self, doc_id: str, update_data: dict, unset: tuple[str, ...] = ()) -> dict:
        """
        Update a sale, recomputing totals when its lines or voucher change.

        Only a newly attached voucher is checked for expiry; passing
        voucher_id=None detaches the current one.
        """
        if "items" not in update_data and "voucher_id" not in update_data:
            return await super().update(doc_id, update_data, unset)

        existing = await self._get_raw(doc_id)
        items = update_data.get("items") or existing["items"]
        discount = existing.get("discount", 0.0)

        if "voucher_id" in update_data:
            voucher_id = update_data["voucher_id"]
            if voucher_id is None:
                discount = 0.0
                unset = (*unset, "voucher_id")
            elif voucher_id != existing.get("voucher_id"):
                discount = await self._discount(voucher_id)

        update_data = {**update_data, **_totals(items, discount)}
        return await super().update(doc_id, update_data, unset)
