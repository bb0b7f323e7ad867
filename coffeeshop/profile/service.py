"""
Profile service: operations on the caller's own record.

A token's subject is either a registered account or an employee, so each
lookup tries accounts first and falls back to employees.
"""

from datetime import datetime, timezone

from motor.motor_asyncio import AsyncIOMotorDatabase

from coffeeshop.auth.helpers import hash_password, verify_password
from coffeeshop.utils import serialize_mongo_doc
from coffeeshop.utils.exceptions import (
    AuthenticationError,
    BadRequestError,
    NotFoundError,
)
from coffeeshop.utils.helpers import parse_object_id

UPDATABLE_FIELDS = {"name", "phone_number", "avatar_path"}


class ProfileService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.accounts = db["accounts"]
        self.employees = db["employees"]

    async def _locate(self, user_id: str):
        oid = parse_object_id(user_id, "user ID")
        for collection in (self.accounts, self.employees):
            doc = await collection.find_one({"_id": oid, "is_deleted": {"$ne": True}})
            if doc:
                return collection, doc
        raise NotFoundError("User not found")

    @staticmethod
    def _safe(doc: dict) -> dict:
        safe = serialize_mongo_doc(doc)
        safe.pop("password", None)
        return safe

    async def get_profile(self, user_id: str) -> dict:
        _, doc = await self._locate(user_id)
        return self._safe(doc)

    async def update_profile(self, user_id: str, update_data: dict) -> dict:
        """Only name, phone number and avatar can be changed here."""
        clean = {
            k: v for k, v in update_data.items()
            if k in UPDATABLE_FIELDS and v is not None
        }
        if not clean:
            raise BadRequestError("No valid fields to update")

        collection, doc = await self._locate(user_id)
        clean["updated_at"] = datetime.now(timezone.utc)
        result = await collection.find_one_and_update(
            {"_id": doc["_id"]}, {"$set": clean}, return_document=True,
        )
        return self._safe(result)

    async def change_password(
        self, user_id: str, current_password: str, new_password: str, confirm_password: str
    ) -> dict:
        if new_password != confirm_password:
            raise BadRequestError("Passwords do not match")

        collection, doc = await self._locate(user_id)
        if not verify_password(current_password, doc.get("password", "")):
            raise AuthenticationError("Current password is incorrect")

        if verify_password(new_password, doc.get("password", "")):
            raise BadRequestError("New password cannot be the same as the current password")

        now = datetime.now(timezone.utc)
        await collection.update_one(
            {"_id": doc["_id"]},
            {"$set": {
                "password": hash_password(new_password),
                "password_changed_at": now,
                "is_first_time": False,
                "updated_at": now,
            }},
        )
        return {"message": "Password changed successfully"}
