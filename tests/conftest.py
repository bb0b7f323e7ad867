"""Pytest fixtures for coffeeshop tests."""

from __future__ import annotations

import asyncio
import copy
import operator
import re
from datetime import timedelta
from types import SimpleNamespace

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from coffeeshop.app import create_app
from coffeeshop.auth.helpers import create_access_token
from coffeeshop.config import get_database


# --- Fake Motor database ---


def _get(doc: dict, path: str):
    value = doc
    for part in path.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


_COMPARISONS = {"$gt": operator.gt, "$gte": operator.ge, "$lt": operator.lt, "$lte": operator.le}


def _match_condition(value, condition) -> bool:
    if isinstance(condition, dict) and any(k.startswith("$") for k in condition):
        for op, arg in condition.items():
            if op == "$ne" and value == arg:
                return False
            if op == "$in" and value not in arg:
                return False
            if op in _COMPARISONS and (value is None or not _COMPARISONS[op](value, arg)):
                return False
            if op == "$regex":
                flags = re.IGNORECASE if "i" in condition.get("$options", "") else 0
                if not isinstance(value, str) or not re.search(arg, value, flags):
                    return False
        return True
    return value == condition


def matches(doc: dict, query: dict) -> bool:
    for key, condition in query.items():
        if key == "$or":
            if not any(matches(doc, sub) for sub in condition):
                return False
        elif not _match_condition(_get(doc, key), condition):
            return False
    return True


def _apply_update(doc: dict, update: dict, inserting: bool = False) -> None:
    for field, value in update.get("$set", {}).items():
        doc[field] = value
    for field, value in update.get("$inc", {}).items():
        doc[field] = doc.get(field, 0) + value
    for field, value in update.get("$push", {}).items():
        doc.setdefault(field, []).append(value)
    for field in update.get("$unset", {}):
        doc.pop(field, None)
    if inserting:
        for field, value in update.get("$setOnInsert", {}).items():
            doc[field] = value


class FakeCursor:
    def __init__(self, docs: list[dict]):
        self._docs = docs

    def sort(self, key, direction=1):
        self._docs.sort(key=lambda d: d.get(key) or 0, reverse=direction < 0)
        return self

    def skip(self, n):
        self._docs = self._docs[n:]
        return self

    def limit(self, n):
        if n:
            self._docs = self._docs[:n]
        return self

    async def to_list(self, length=None):
        return self._docs if length is None else self._docs[:length]

    def __aiter__(self):
        self._iter = iter(self._docs)
        return self

    async def __anext__(self):
        try:
            return next(self._iter)
        except StopIteration:
            raise StopAsyncIteration


class FakeCollection:
    """In-memory stand-in for AsyncIOMotorCollection.

    Every coroutine yields to the event loop before touching the data, like a
    network round trip would, so concurrent callers interleave.
    """

    def __init__(self, name: str):
        self.name = name
        self.docs: list[dict] = []

    def _find(self, query: dict) -> list[dict]:
        return [d for d in self.docs if matches(d, query or {})]

    async def insert_one(self, doc: dict):
        await asyncio.sleep(0)
        doc.setdefault("_id", ObjectId())
        self.docs.append(copy.deepcopy(doc))
        return SimpleNamespace(inserted_id=doc["_id"])

    async def find_one(self, query: dict | None = None, sort=None):
        await asyncio.sleep(0)
        found = self._find(query or {})
        if sort:
            key, direction = sort[0]
            found.sort(key=lambda d: d.get(key) or 0, reverse=direction < 0)
        return copy.deepcopy(found[0]) if found else None

    def find(self, query: dict | None = None):
        return FakeCursor([copy.deepcopy(d) for d in self._find(query or {})])

    async def count_documents(self, query: dict) -> int:
        await asyncio.sleep(0)
        return len(self._find(query))

    async def update_one(self, query: dict, update: dict, upsert: bool = False):
        await asyncio.sleep(0)
        found = self._find(query)
        if found:
            before = copy.deepcopy(found[0])
            _apply_update(found[0], update)
            return SimpleNamespace(
                matched_count=1,
                modified_count=int(before != found[0]),
                upserted_id=None,
            )
        if upsert:
            doc = {k: v for k, v in query.items() if not k.startswith("$")}
            _apply_update(doc, update, inserting=True)
            result = await self.insert_one(doc)
            return SimpleNamespace(matched_count=0, modified_count=0, upserted_id=result.inserted_id)
        return SimpleNamespace(matched_count=0, modified_count=0, upserted_id=None)

    async def find_one_and_update(self, query: dict, update: dict, return_document=False):
        await asyncio.sleep(0)
        found = self._find(query)
        if not found:
            return None
        before = copy.deepcopy(found[0])
        _apply_update(found[0], update)
        return copy.deepcopy(found[0] if return_document else before)

    def aggregate(self, pipeline: list[dict]) -> FakeCursor:
        docs = [copy.deepcopy(d) for d in self.docs]
        for stage in pipeline:
            if "$match" in stage:
                docs = [d for d in docs if matches(d, stage["$match"])]
            elif "$group" in stage:
                spec = stage["$group"]
                if not docs:
                    continue
                group = {"_id": None}
                for out, acc in spec.items():
                    if out == "_id":
                        continue
                    field = acc["$sum"]
                    group[out] = sum(
                        1 if field == 1 else (_get(d, field.lstrip("$")) or 0)
                        for d in docs
                    )
                docs = [group]
        return FakeCursor(docs)


class FakeDatabase:
    def __init__(self):
        self._collections: dict[str, FakeCollection] = {}

    def __getitem__(self, name: str) -> FakeCollection:
        if name not in self._collections:
            self._collections[name] = FakeCollection(name)
        return self._collections[name]


# --- Fixtures ---


@pytest.fixture
def db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def app(db):
    application = create_app(use_lifespan=False)
    application.dependency_overrides[get_database] = lambda: db
    return application


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


def make_token(role: str | None, sub: str | None = None, **extra) -> str:
    payload = {"sub": sub or str(ObjectId()), "email": "staff@coffeeshop.io", **extra}
    if role is not None:
        payload["role"] = role
    return create_access_token(payload, expires_delta=timedelta(minutes=5))


@pytest.fixture
def auth_headers():
    """Build an Authorization header for a given role claim."""

    def _headers(role: str | None, **kwargs) -> dict:
        return {"Authorization": f"Bearer {make_token(role, **kwargs)}"}

    return _headers
