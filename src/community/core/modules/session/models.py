"""Session management models."""

from datetime import datetime
from typing import NewType
from uuid import UUID

from pydantic import BaseModel, Field

from community.core.db import MongoModel
from community.utils import now

AuthToken = NewType("AuthToken", str)


class Session(MongoModel):
    """User authentication session.

    Indexed on token - unique, user_id, expires_at (TTL, expireAfterSeconds=0).
    """

    user_id: UUID
    token: AuthToken
    expires_at: datetime
    created_at: datetime = Field(default_factory=now)
    user_agent: str | None = None
    ip_address: str | None = None


class SessionData(BaseModel):
    """Session issued to a client."""

    token: AuthToken = Field(..., description="Opaque session token, sent back as a Bearer token")
    user_id: UUID = Field(..., description="Owner of the session")
    expires_at: datetime = Field(..., description="Absolute expiry time (UTC)")
