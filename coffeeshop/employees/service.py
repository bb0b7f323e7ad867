"""
Employee service: staff records, activation, and check-ins.

Employee documents hold a bcrypt password hash and a role; staff log in
with them (see AuthService). Hashes never leave this service.
"""

from datetime import datetime, timezone

from coffeeshop.auth.helpers import hash_password
from coffeeshop.config import settings
from coffeeshop.utils import serialize_mongo_doc
from coffeeshop.utils.exceptions import BadRequestError, NotFoundError
from coffeeshop.utils.helpers import parse_object_id
from coffeeshop.utils.service import CollectionService


def _check_password(password: str) -> None:
    if len(password) < settings.min_password_length:
        raise BadRequestError("Password too short")


class EmployeeService(CollectionService):
    collection_name = "employees"
    label = "Employee"
    search_fields = ("name",)

    def _serialize(self, doc: dict) -> dict:
        safe = serialize_mongo_doc(doc)
        safe.pop("password", None)
        return safe

    async def _check_email(self, email: str, exclude_id: str | None = None) -> None:
        """
        Staff emails must be unused by other employees and by customer
        accounts; login matches accounts first, so a shared email would lock
        the employee out.
        """
        query = {"email": email}
        if exclude_id:
            query["_id"] = {"$ne": parse_object_id(exclude_id, "employee ID")}
        if await self.collection.find_one(self._filters(query)):
            raise BadRequestError("Email already exists")
        if await self.db["accounts"].find_one({"email": email}):
            raise BadRequestError("Email already exists")

    async def create(self, data: dict, created_by: str | None = None) -> dict:
        """Create an employee. Email must be unique; password is hashed."""
        data = {**data, "email": data["email"].lower()}
        await self._check_email(data["email"])

        _check_password(data["password"])
        data["password"] = hash_password(data["password"])
        data["checkins"] = []
        return await super().create(data, created_by=created_by)

    async def update(self, doc_id: str, update_data: dict) -> dict:
        if update_data.get("email"):
            update_data["email"] = update_data["email"].lower()
            await self._check_email(update_data["email"], exclude_id=doc_id)

        if update_data.get("password"):
            _check_password(update_data["password"])
            update_data["password"] = hash_password(update_data["password"])

        return await super().update(doc_id, update_data)

    async def set_active(self, doc_id: str, is_active: bool) -> dict:
        return await super().update(doc_id, {"is_active": is_active})

    async def verify(self, doc_id: str) -> dict:
        return await super().update(doc_id, {"is_verified": True})

    # ── Check-ins ────────────────────────────────────────────────

    async def add_checkin(self, doc_id: str, data: dict) -> dict:
        """Append an in/out check-in to the employee's record."""
        oid = parse_object_id(doc_id, "employee ID")
        checkin = {
            "type": data["type"],
            "value": data.get("value", 0),
            "checkin_time": data.get("checkin_time") or datetime.now(timezone.utc),
        }
        result = await self.collection.update_one(
            self._filters({"_id": oid}),
            {"$push": {"checkins": checkin}},
        )
        if result.matched_count == 0:
            raise NotFoundError("Employee not found")
        return serialize_mongo_doc(checkin)

    async def list_checkins(self, doc_id: str) -> list[dict]:
        employee = await self._get_raw(doc_id)
        return serialize_mongo_doc(employee.get("checkins", []))
