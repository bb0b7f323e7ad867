"""
Warehouse service: import receipts and the stock they feed.

Collections:
  - warehouse_imports → one document per receipt, with its line items
  - stock_items       → running quantity per (name, unit, price)

Every import line is folded into stock. Editing an import applies only the
difference between its old and new lines; deleting it takes the goods back
out.
"""

from datetime import datetime, timezone

from motor.motor_asyncio import AsyncIOMotorDatabase

from coffeeshop.utils import Logger
from coffeeshop.utils.schemas import fold_lines
from coffeeshop.utils.service import CollectionService

logger = Logger("warehouse")


class StockService(CollectionService):
    collection_name = "stock_items"
    label = "Stock item"

    async def adjust(self, key: tuple, delta: float) -> None:
        """Add `delta` to the stock item for `key`, creating it if missing."""
        if delta == 0:
            return
        name, unit, price = key
        now = datetime.now(timezone.utc)
        await self.collection.update_one(
            {"name": name, "unit": unit, "price": price},
            {
                "$inc": {"quantity": delta},
                "$set": {"updated_at": now},
                "$setOnInsert": {"is_deleted": False, "created_at": now},
            },
            upsert=True,
        )

    async def apply(self, totals: dict[tuple, float], sign: int = 1) -> None:
        for key, quant in totals.items():
            await self.adjust(key, sign * quant)

    async def take(self, key: tuple, quant: float) -> bool:
        """
        Atomically remove `quant` from the stock item for `key`.

        The quantity guard is part of the update filter, so concurrent takers
        cannot drive a stock item below zero. Returns False when short.
        """
        name, unit, price = key
        result = await self.collection.update_one(
            self._filters({
                "name": name, "unit": unit, "price": price,
                "quantity": {"$gte": quant},
            }),
            {
                "$inc": {"quantity": -quant},
                "$set": {"updated_at": datetime.now(timezone.utc)},
            },
        )
        return result.modified_count == 1


class WarehouseService(CollectionService):
    collection_name = "warehouse_imports"
    label = "Import"

    def __init__(self, db: AsyncIOMotorDatabase):
        super().__init__(db)
        self.stock = StockService(db)

    async def create(self, data: dict, created_by: str | None = None) -> dict:
        record = await super().create(data, created_by=created_by)
        await self.stock.apply(fold_lines(data["items"]))
        logger.info(f"Import {record['_id']} received {len(data['items'])} line(s)")
        return record

    async def update(self, doc_id: str, update_data: dict) -> dict:
        existing = await self._get_raw(doc_id)
        new_items = update_data.get("items")
        record = await super().update(doc_id, update_data)

        if new_items is not None:
            old = fold_lines(existing.get("items", []))
            new = fold_lines(new_items)
            for key in old.keys() | new.keys():
                await self.stock.adjust(key, new.get(key, 0) - old.get(key, 0))
        return record

    async def delete(self, doc_id: str) -> dict:
        existing = await self._get_raw(doc_id)
        result = await super().delete(doc_id)
        await self.stock.apply(fold_lines(existing.get("items", [])), sign=-1)
        return result
