from datetime import timedelta
from typing import Any
from uuid import UUID

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from community.core.core import Service
from community.core.modules.session.models import AuthToken, Session, SessionData
from community.core.modules.session.store import SessionStore
from community.core.modules.session.utils import generate_session_token
from community.errors import ValidationError
from community.utils import now

logger = structlog.get_logger(__name__)


class SessionService(Service):
    """Creates, validates and revokes opaque session tokens.

    Expiry is enforced twice: lazily on every validation and eagerly by
    `cleanup_expired_sessions`, which the sweeper runs periodically.
    Store errors are never swallowed here.
    """

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._store = SessionStore(database.get_collection("sessions"))

    async def on_start(self) -> None:
        """Create indexes on startup."""
        await self._store.create_indexes()

    async def create_session(
        self,
        user_id: UUID,
        user_agent: str | None = None,
        ip_address: str | None = None,
        expires_in_days: int | None = None,
    ) -> SessionData:
        """Issue a new session, valid for `expires_in_days` (configured default when None)."""
        if expires_in_days is None:
            expires_in_days = self.core.config.session_timeout_days
        if expires_in_days < 1:
            raise ValidationError("Session lifetime must be at least one day")

        created_at = now()
        session = Session(
            user_id=user_id,
            token=generate_session_token(),
            expires_at=created_at + timedelta(days=expires_in_days),
            created_at=created_at,
            user_agent=user_agent,
            ip_address=ip_address,
        )
        await self._store.insert(session)
        logger.debug("session_created", user_id=str(user_id), expires_at=session.expires_at.isoformat())
        return SessionData(token=session.token, user_id=user_id, expires_at=session.expires_at)

    async def validate_session(self, token: AuthToken | None) -> Session | None:
        """Return the session if it exists and has not expired, otherwise None."""
        if not token:
            return None
        return await self._store.find_live(token, now())

    async def delete_session(self, token: AuthToken) -> bool:
        """Delete a single session. Returns False if it was already gone."""
        return await self._store.delete_by_token(token) > 0

    async def delete_all_user_sessions(self, user_id: UUID) -> int:
        """Delete every session of a user ("logout everywhere")."""
        deleted = await self._store.delete_by_user(user_id)
        logger.debug("user_sessions_deleted", user_id=str(user_id), count=deleted)
        return deleted

    async def cleanup_expired_sessions(self) -> int:
        """Delete sessions whose expiry is strictly in the past."""
        return await self._store.delete_expired(now())
