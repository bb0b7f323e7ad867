"""Supplier service: CRUD on the suppliers collection."""

from coffeeshop.utils.service import CollectionService


class SupplierService(CollectionService):
    collection_name = "suppliers"
    label = "Supplier"
    search_fields = ("name", "field", "phone")

    async def create(self, data: dict, created_by: str | None = None) -> dict:
        """Create a supplier. Phone numbers are unique among live suppliers."""
        await self._ensure_unique("phone", data["phone"])
        return await super().create(data, created_by=created_by)

    async def update(self, doc_id: str, update_data: dict, unset: tuple[str, ...] = ()) -> dict:
        if update_data.get("phone"):
            await self._ensure_unique("phone", update_data["phone"], exclude_id=doc_id)
        return await super().update(doc_id, update_data, unset)
