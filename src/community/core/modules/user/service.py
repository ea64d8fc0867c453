from typing import Any
from uuid import UUID

import bcrypt
import structlog
from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError

from community.core.core import Service
from community.core.modules.user.models import User
from community.core.modules.user.validators import (
    MAX_PASSWORD_BYTES,
    normalize_bio,
    normalize_email,
    normalize_name,
    validate_password,
)
from community.errors import NotFoundError, ValidationError

logger = structlog.get_logger(__name__)


class UserService(Service):
    """User directory backed by the users collection."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("users")

    async def on_start(self) -> None:
        """Create indexes on startup."""
        await self._collection.create_index([("email", 1)], unique=True)

    async def find_by_id(self, user_id: UUID) -> User | None:
        doc = await self._collection.find_one({"_id": user_id})
        if doc is None:
            return None
        return User.model_validate(doc)

    async def find_by_email(self, email: str) -> User | None:
        doc = await self._collection.find_one({"email": email.strip().lower()})
        if doc is None:
            return None
        return User.model_validate(doc)

    async def get_user(self, user_id: UUID) -> User:
        """Get user by ID, raises NotFoundError if missing."""
        user = await self.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def create_user(self, name: str, email: str, password: str, bio: str | None = None) -> User:
        """Create user with hashed password."""
        name = normalize_name(name)
        email = normalize_email(email)
        validate_password(password)

        if await self.find_by_email(email) is not None:
            raise ValidationError("User already exists")

        password_hash = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")
        user = User(name=name, email=email, password_hash=password_hash, bio=normalize_bio(bio))
        try:
            await self._collection.insert_one(user.to_mongo())
        except DuplicateKeyError as e:
            # Concurrent registration with the same email
            raise ValidationError("User already exists") from e
        logger.info("user_registered", user_id=str(user.id))
        return user

    async def verify_password(self, email: str, password: str) -> User | None:
        """Return the user if the password matches the stored hash."""
        password_bytes = password.encode("utf-8")
        if len(password_bytes) > MAX_PASSWORD_BYTES:
            return None
        user = await self.find_by_email(email)
        if user is None:
            return None
        if not bcrypt.checkpw(password_bytes, user.password_hash.encode("utf-8")):
            return None
        return user

    async def update_profile(self, user_id: UUID, name: str, bio: str | None) -> User:
        """Replace the name of a user, and the bio when one is given."""
        fields = {"name": normalize_name(name)}
        if bio is not None:
            fields["bio"] = normalize_bio(bio)
        doc = await self._collection.find_one_and_update(
            {"_id": user_id},
            {"$set": fields},
            return_document=ReturnDocument.AFTER,
        )
        if doc is None:
            raise NotFoundError("User not found")
        return User.model_validate(doc)
