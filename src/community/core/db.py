from typing import Any, Self
from urllib.parse import urlparse
from uuid import UUID, uuid4

import structlog
from pydantic import BaseModel, ConfigDict, Field
from pymongo import AsyncMongoClient
from pymongo.asynchronous.cursor import AsyncCursor
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from community.config import Config

logger = structlog.get_logger(__name__)


class MongoModel(BaseModel):
    id: UUID = Field(alias="_id", serialization_alias="id", default_factory=uuid4)

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
        json_schema_serialization_defaults_required=True,
    )

    def to_mongo(self) -> dict[str, Any]:
        """Convert the model to a dictionary for MongoDB storage with _id field."""
        data = self.model_dump()
        if "id" in data:
            data["_id"] = data.pop("id")  # Rename id → _id for MongoDB
        return data

    @classmethod
    async def list_cursor(cls, cursor: AsyncCursor[dict[str, Any]]) -> list[Self]:
        """Iterate over an AsyncCursor and return a list of model instances."""
        return [cls.model_validate(item) async for item in cursor]


class Mongo:
    """Persistence handle: MongoDB client, application database and readiness check.

    Held by Core. Readiness is checked with ping(), is_ready keeps the last result.
    """

    def __init__(self, config: Config) -> None:
        self.client: AsyncMongoClient[dict[str, Any]] = AsyncMongoClient(
            config.database_url,
            uuidRepresentation="standard",
            tz_aware=True,
            serverSelectionTimeoutMS=config.database_timeout_ms,
            socketTimeoutMS=config.database_socket_timeout_ms,
            maxPoolSize=config.database_max_pool_size,
            minPoolSize=config.database_min_pool_size,
        )
        self.database: AsyncDatabase[dict[str, Any]] = self.client.get_database(urlparse(config.database_url).path[1:])
        self._ready = False

    @property
    def is_ready(self) -> bool:
        """Result of the most recent ping."""
        return self._ready

    async def ping(self) -> bool:
        """Check that the database answers within the server selection timeout."""
        try:
            await self.database.command("ping")
        except PyMongoError as e:
            if self._ready:
                logger.warning("database_unreachable", error=str(e))
            self._ready = False
        else:
            self._ready = True
        return self._ready

    async def close(self) -> None:
        await self.client.aclose()
