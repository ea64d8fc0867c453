"""In-memory stand-ins for the few PyMongo async operations the services use."""

import copy
import operator
from collections.abc import Callable
from typing import Any

from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError, ServerSelectionTimeoutError
from pymongo.results import DeleteResult, InsertOneResult

from community.core.db import Mongo

COMPARISONS: dict[str, Callable[[Any, Any], bool]] = {
    "$gt": operator.gt,
    "$gte": operator.ge,
    "$lt": operator.lt,
    "$lte": operator.le,
    "$ne": operator.ne,
}


def matches(doc: dict[str, Any], query: dict[str, Any]) -> bool:
    for key, condition in query.items():
        if isinstance(condition, dict) and condition and all(op.startswith("$") for op in condition):
            if key not in doc:
                return False
            if not all(COMPARISONS[op](doc[key], value) for op, value in condition.items()):
                return False
        elif doc.get(key) != condition:
            return False
    return True


class FakeCollection:
    def __init__(self, name: str) -> None:
        self.name = name
        self.docs: list[dict[str, Any]] = []
        self.indexes: list[dict[str, Any]] = []
        self.fail_with: PyMongoError | None = None
        self.calls = 0

    def _check(self) -> None:
        self.calls += 1
        if self.fail_with is not None:
            raise self.fail_with

    async def create_index(self, keys: list[tuple[str, int]], **kwargs: Any) -> str:
        self._check()
        self.indexes.append({"keys": keys, **kwargs})
        return "_".join(f"{field}_{direction}" for field, direction in keys)

    def _unique_fields(self) -> list[str]:
        fields = ["_id"]
        fields.extend(index["keys"][0][0] for index in self.indexes if index.get("unique"))
        return fields

    async def insert_one(self, document: dict[str, Any]) -> InsertOneResult:
        self._check()
        for field in self._unique_fields():
            if any(existing.get(field) == document.get(field) for existing in self.docs):
                raise DuplicateKeyError(f"E11000 duplicate key error collection: {self.name} index: {field}")
        self.docs.append(copy.deepcopy(document))
        return InsertOneResult(document["_id"], acknowledged=True)

    async def find_one(self, query: dict[str, Any]) -> dict[str, Any] | None:
        self._check()
        doc = next((d for d in self.docs if matches(d, query)), None)
        return copy.deepcopy(doc)

    async def find_one_and_update(
        self, query: dict[str, Any], update: dict[str, Any], return_document: ReturnDocument = ReturnDocument.BEFORE
    ) -> dict[str, Any] | None:
        self._check()
        doc = next((d for d in self.docs if matches(d, query)), None)
        if doc is None:
            return None
        before = copy.deepcopy(doc)
        doc.update(update.get("$set", {}))
        return copy.deepcopy(doc) if return_document == ReturnDocument.AFTER else before

    async def delete_one(self, query: dict[str, Any]) -> DeleteResult:
        self._check()
        for i, doc in enumerate(self.docs):
            if matches(doc, query):
                del self.docs[i]
                return DeleteResult({"n": 1}, acknowledged=True)
        return DeleteResult({"n": 0}, acknowledged=True)

    async def delete_many(self, query: dict[str, Any]) -> DeleteResult:
        self._check()
        kept = [d for d in self.docs if not matches(d, query)]
        deleted = len(self.docs) - len(kept)
        self.docs = kept
        return DeleteResult({"n": deleted}, acknowledged=True)


class FakeDatabase:
    def __init__(self) -> None:
        self.collections: dict[str, FakeCollection] = {}
        self.down = False

    def get_collection(self, name: str) -> FakeCollection:
        if name not in self.collections:
            self.collections[name] = FakeCollection(name)
        return self.collections[name]

    async def command(self, name: str) -> dict[str, Any]:
        if self.down:
            raise ServerSelectionTimeoutError("localhost:27017: [Errno 111] Connection refused")
        return {"ok": 1.0, "command": name}


class FakeMongo(Mongo):
    """Mongo handle over FakeDatabase, readiness probing is inherited unchanged."""

    def __init__(self) -> None:  # noqa: PLW0231
        self.database = FakeDatabase()  # type: ignore[assignment]
        self._ready = False
        self.closed = False

    async def close(self) -> None:
        self.closed = True
