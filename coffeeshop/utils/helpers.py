import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from bson import ObjectId
from fastapi import Query
from fastapi.responses import JSONResponse

from coffeeshop.config.settings import settings
from .exceptions import BadRequestError


def serialize_mongo_doc(doc):
    """Recursively convert ObjectIds and datetimes in a MongoDB document."""
    if not doc:
        return doc

    if isinstance(doc, list):
        return [serialize_mongo_doc(d) for d in doc]

    if isinstance(doc, dict):
        clean = {}
        for k, v in doc.items():
            if isinstance(v, ObjectId):
                clean[k] = str(v)
            elif isinstance(v, datetime):
                clean[k] = v.isoformat()
            elif isinstance(v, (dict, list)):
                clean[k] = serialize_mongo_doc(v)
            else:
                clean[k] = v
        return clean

    return doc


def parse_object_id(id_str: str, label: str = "ID") -> ObjectId:
    """Convert a string to ObjectId, raising 400 when it is malformed."""
    if not ObjectId.is_valid(id_str):
        raise BadRequestError(f"Invalid {label}")
    return ObjectId(id_str)


@dataclass(frozen=True)
class Pagination:
    page: int
    limit: int

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    def envelope(self, items: list, total: int) -> dict:
        return {
            "items": items,
            "total_items": total,
            "total_pages": math.ceil(total / self.limit),
            "current_page": self.page,
            "limit": self.limit,
        }


def get_pagination(
    page: int = Query(1),
    limit: int = Query(settings.default_page_limit),
) -> Pagination:
    """FastAPI dependency: validates page/limit query parameters."""
    if page < 1 or limit < 1:
        raise BadRequestError("Page and limit must be greater than 0")
    if limit > settings.max_page_limit:
        raise BadRequestError(f"Limit must be less than {settings.max_page_limit}")
    return Pagination(page=page, limit=limit)


def success_response(
    data: Optional[Any] = None,
    message: str = "Success",
    code: int = 200,
) -> JSONResponse:
    """Standard success JSON response."""
    content = {"success": True, "message": message}
    if data is not None:
        content["data"] = data
    return JSONResponse(status_code=code, content=content)

