"""Customer service: CRUD on the customers collection."""

from coffeeshop.utils.exceptions import BadRequestError, NotFoundError
from coffeeshop.utils.service import CollectionService


class CustomerService(CollectionService):
    collection_name = "customers"
    label = "Customer"
    search_fields = ("name", "phone_number")

    async def create(self, data: dict, created_by: str | None = None) -> dict:
        """Create a new customer. Checks for duplicate phone number."""
        await self._ensure_unique("phone_number", data["phone_number"], label="phone")
        return await super().create(data, created_by=created_by)

    async def update(self, doc_id: str, update_data: dict, unset: tuple[str, ...] = ()) -> dict:
        if update_data.get("phone_number"):
            await self._ensure_unique(
                "phone_number", update_data["phone_number"], exclude_id=doc_id, label="phone"
            )
        return await super().update(doc_id, update_data, unset)

    async def search(self, query: str) -> list[dict]:
        """Search by name or phone. Nothing found is a 404."""
        if not query:
            raise BadRequestError("Search query is required")
        customers = await super().search(query)
        if not customers:
            raise NotFoundError("Not found")
        return customers
