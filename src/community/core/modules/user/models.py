from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from community.core.db import MongoModel
from community.utils import now


class User(MongoModel):
    """User domain model with credentials."""

    name: str
    email: str  # lower-cased, unique
    password_hash: str  # bcrypt hash
    bio: str = ""
    created_at: datetime = Field(default_factory=now)


class UserView(BaseModel):
    """User account information (API representation)."""

    id: UUID = Field(..., description="User ID")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Email address")
    bio: str = Field(..., description="Short profile text")
    created_at: datetime = Field(..., description="Registration time")

    @classmethod
    def from_domain(cls, user: User) -> "UserView":
        """Create view model from domain model."""
        return cls(id=user.id, name=user.name, email=user.email, bio=user.bio, created_at=user.created_at)
