"""
Reports service: headline numbers for the back office.

Counts exclude soft-deleted documents; revenue is the sum of final_value
over live sales.
"""

from motor.motor_asyncio import AsyncIOMotorDatabase

from coffeeshop.utils.service import NOT_DELETED


class ReportsService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db

    async def summary(self) -> dict:
        counts = {}
        for name in ("customers", "employees", "products", "sales"):
            counts[name] = await self.db[name].count_documents(NOT_DELETED)

        pipeline = [
            {"$match": NOT_DELETED},
            {"$group": {"_id": None, "revenue": {"$sum": "$final_value"}}},
        ]
        result = await self.db["sales"].aggregate(pipeline).to_list(1)
        revenue = result[0]["revenue"] if result else 0

        return {**counts, "revenue": revenue}
