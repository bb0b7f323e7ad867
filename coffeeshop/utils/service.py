"""
Base service: CRUD on a single MongoDB collection.

Resource services subclass this and set `collection_name`, `label` and
`search_fields`. Documents are soft-deleted (is_deleted=True) and every
read filters them out.
"""

import re
from datetime import datetime, timezone
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from .exceptions import ConflictError, NotFoundError
from .helpers import Pagination, parse_object_id, serialize_mongo_doc

NOT_DELETED = {"is_deleted": {"$ne": True}}


class CollectionService:
    collection_name: str = ""
    label: str = "Document"
    search_fields: tuple[str, ...] = ("name",)

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db[self.collection_name]

    # ── Helpers ──────────────────────────────────────────────────

    def _filters(self, extra: Optional[dict] = None) -> dict:
        return {**NOT_DELETED, **(extra or {})}

    def _search_filter(self, query: str) -> dict:
        pattern = re.escape(query)
        return {
            "$or": [
                {field: {"$regex": pattern, "$options": "i"}}
                for field in self.search_fields
            ]
        }

    def _serialize(self, doc: dict) -> dict:
        return serialize_mongo_doc(doc)

    async def _ensure_unique(
        self, field: str, value, exclude_id: Optional[str] = None, label: Optional[str] = None
    ) -> None:
        """409 when another live document already holds `value` in `field`."""
        query = {field: value}
        if exclude_id:
            query["_id"] = {"$ne": parse_object_id(exclude_id, f"{self.label.lower()} ID")}
        if await self.collection.find_one(self._filters(query)):
            raise ConflictError(
                f"{self.label} with {label or field} '{value}' already exists"
            )

    async def _get_raw(self, doc_id: str) -> dict:
        oid = parse_object_id(doc_id, f"{self.label.lower()} ID")
        doc = await self.collection.find_one(self._filters({"_id": oid}))
        if not doc:
            raise NotFoundError(f"{self.label} not found")
        return doc

    # ── CRUD ─────────────────────────────────────────────────────

    async def create(self, data: dict, created_by: str | None = None) -> dict:
        now = datetime.now(timezone.utc)
        doc = {
            **data,
            "is_deleted": False,
            "created_by": created_by,
            "created_at": now,
            "updated_at": now,
        }
        result = await self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return self._serialize(doc)

    async def get(self, doc_id: str) -> dict:
        return self._serialize(await self._get_raw(doc_id))

    async def paginate(
        self, pagination: Pagination, extra: Optional[dict] = None
    ) -> dict:
        filters = self._filters(extra)
        total = await self.collection.count_documents(filters)
        cursor = (
            self.collection.find(filters)
            .sort("created_at", -1)
            .skip(pagination.skip)
            .limit(pagination.limit)
        )
        docs = [self._serialize(d) async for d in cursor]
        return pagination.envelope(docs, total)

    async def all(self) -> list[dict]:
        cursor = self.collection.find(self._filters()).sort("created_at", -1)
        return [self._serialize(d) async for d in cursor]

    async def count(self) -> int:
        return await self.collection.count_documents(self._filters())

    async def search(self, query: str) -> list[dict]:
        cursor = self.collection.find(self._filters(self._search_filter(query)))
        return [self._serialize(d) async for d in cursor]

    async def update(
        self, doc_id: str, update_data: dict, unset: tuple[str, ...] = ()
    ) -> dict:
        """Update fields. None values are ignored; fields in `unset` are removed."""
        oid = parse_object_id(doc_id, f"{self.label.lower()} ID")
        clean = {k: v for k, v in update_data.items() if v is not None}
        clean["updated_at"] = datetime.now(timezone.utc)
        changes = {"$set": clean}
        if unset:
            changes["$unset"] = {field: "" for field in unset}
        result = await self.collection.find_one_and_update(
            self._filters({"_id": oid}),
            changes,
            return_document=True,
        )
        if not result:
            raise NotFoundError(f"{self.label} not found")
        return self._serialize(result)

    async def delete(self, doc_id: str) -> dict:
        """Soft-delete (sets is_deleted=True, preserves data)."""
        oid = parse_object_id(doc_id, f"{self.label.lower()} ID")
        result = await self.collection.update_one(
            self._filters({"_id": oid}),
            {"$set": {"is_deleted": True, "deleted_at": datetime.now(timezone.utc)}},
        )
        if result.modified_count == 0:
            raise NotFoundError(f"{self.label} not found or already deleted")
        return {"message": f"{self.label} deleted successfully"}
