"""MongoDB-backed storage for session records."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pymongo.asynchronous.collection import AsyncCollection

from community.core.modules.session.models import AuthToken, Session


class SessionStore:
    """Keyed access to the sessions collection.

    Knows nothing about users: callers resolve the owner by `user_id` themselves.
    """

    def __init__(self, collection: AsyncCollection[dict[str, Any]]) -> None:
        self._collection = collection

    async def create_indexes(self) -> None:
        # Primary lookup key, one live record per token
        await self._collection.create_index([("token", 1)], unique=True)
        # Bulk logout by owner
        await self._collection.create_index([("user_id", 1)])
        # TTL index, MongoDB removes documents once expires_at has passed.
        # Lazy checks and the sweeper stay authoritative, the TTL monitor runs only every ~60s.
        await self._collection.create_index([("expires_at", 1)], expireAfterSeconds=0)

    async def insert(self, session: Session) -> None:
        await self._collection.insert_one(session.to_mongo())

    async def find_live(self, token: AuthToken, at: datetime) -> Session | None:
        """Find a session by token that is still valid at the given moment."""
        doc = await self._collection.find_one({"token": token, "expires_at": {"$gt": at}})
        if doc is None:
            return None
        return Session.model_validate(doc)

    async def delete_by_token(self, token: AuthToken) -> int:
        result = await self._collection.delete_one({"token": token})
        return result.deleted_count

    async def delete_by_user(self, user_id: UUID) -> int:
        result = await self._collection.delete_many({"user_id": user_id})
        return result.deleted_count

    async def delete_expired(self, before: datetime) -> int:
        result = await self._collection.delete_many({"expires_at": {"$lt": before}})
        return result.deleted_count
