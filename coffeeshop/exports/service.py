"""Export service: takes goods out of stock."""

from coffeeshop.utils import Logger
from coffeeshop.utils.exceptions import BadRequestError
from coffeeshop.utils.schemas import fold_lines
from coffeeshop.utils.service import CollectionService
from coffeeshop.warehouse.service import StockService

logger = Logger("exports")


class ExportService(CollectionService):
    collection_name = "warehouse_exports"
    label = "Export"

    def __init__(self, db):
        super().__init__(db)
        self.stock = StockService(db)

    async def create(self, data: dict, created_by: str | None = None) -> dict:
        """
        Deduct the export's lines from stock, then record it.

        Each line is taken with a guarded update. When one comes up short the
        lines already taken are put back, so a rejected export leaves stock
        untouched.
        """
        taken: dict[tuple, float] = {}
        for key, quant in fold_lines(data["items"]).items():
            if not await self.stock.take(key, quant):
                await self.stock.apply(taken)
                raise BadRequestError(f"Insufficient stock for {key[0]}")
            taken[key] = quant

        record = await super().create(data, created_by=created_by)
        logger.info(f"Export {record['_id']} shipped {len(data['items'])} line(s)")
        return record

    async def delete(self, doc_id: str) -> dict:
        existing = await self._get_raw(doc_id)
        result = await super().delete(doc_id)
        await self.stock.apply(fold_lines(existing.get("items", [])))
        return result
