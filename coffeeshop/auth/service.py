"""Authentication service: account registration and login."""

from datetime import datetime, timezone

from motor.motor_asyncio import AsyncIOMotorDatabase

from coffeeshop.config import settings
from coffeeshop.rbac import Role
from coffeeshop.utils import Logger
from coffeeshop.utils.exceptions import (
    AuthenticationError,
    BadRequestError,
    ForbiddenError,
    NotFoundError,
)
from .helpers import hash_password, verify_password, create_access_token

logger = Logger("auth")


class AuthService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.accounts = db["accounts"]
        self.employees = db["employees"]

    async def register(self, data: dict) -> dict:
        """
        Create a Customer account.

        New accounts are only verified and active out of the box in debug
        mode; no route activates them afterwards.
        """
        email = data["email"].lower()
        if await self.accounts.find_one({"email": email}):
            raise BadRequestError("Account already exists")

        if data["password"] != data["confirm_password"]:
            raise BadRequestError("Passwords do not match")

        if not data.get("confirm_tos"):
            raise BadRequestError("Please accept TOS")

        if len(data["password"]) < settings.min_password_length:
            raise BadRequestError("Password too short")

        now = datetime.now(timezone.utc)
        account_doc = {
            "email": email,
            "password": hash_password(data["password"]),
            "name": data["name"],
            "role": Role.CUSTOMER.value,
            "avatar_path": "",
            "is_verified": settings.debug,
            "is_active": settings.debug,
            "is_first_time": True,
            "created_at": now,
            "updated_at": now,
        }
        result = await self.accounts.insert_one(account_doc)
        logger.info(f"Registered account {email}")
        return {"id": str(result.inserted_id), "email": email}

    async def authenticate(self, email: str, password: str) -> dict:
        """
        Verify credentials and return a bearer token.

        Staff sign in with the employee record their manager created,
        everyone else with a registered account.
        """
        collection = self.accounts
        account = await collection.find_one({"email": email.lower()})
        if not account:
            collection = self.employees
            account = await collection.find_one(
                {"email": email.lower(), "is_deleted": {"$ne": True}}
            )
        if not account:
            raise NotFoundError("Account not found")

        if not account.get("is_verified", False):
            raise ForbiddenError("Account not verified")

        if not verify_password(password, account.get("password", "")):
            raise AuthenticationError("Wrong password")

        if not account.get("is_active", False):
            raise ForbiddenError("Account is disabled")

        token_payload = {
            "sub": str(account["_id"]),
            "email": account["email"],
            "name": account.get("name"),
            "role": account.get("role"),
        }
        token = create_access_token(data=token_payload)

        await collection.update_one(
            {"_id": account["_id"]},
            {"$set": {"last_login": datetime.now(timezone.utc)}},
        )

        return {"access_token": token, "token_type": "bearer"}
