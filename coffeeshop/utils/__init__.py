from .helpers import (
    serialize_mongo_doc,
    success_response,
    parse_object_id,
    Pagination,
    get_pagination,
)
from .logger import Logger

__all__ = [
    "serialize_mongo_doc",
    "success_response",
    "parse_object_id",
    "Pagination",
    "get_pagination",
    "Logger",
]
