from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from uuid import UUID

from community.config import Config
from community.core.core import Core
from community.core.db import Mongo
from community.core.modules.access.models import AuthContext
from community.core.modules.session.models import AuthToken, SessionData
from community.core.modules.user.models import UserView
from community.errors import AuthenticationError


class App:
    """Facade for all application operations, validates permissions before delegating to Core."""

    def __init__(self, config: Config, mongo: Mongo | None = None) -> None:
        self._core = Core(config, mongo)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    async def authenticate(self, auth_token: AuthToken) -> AuthContext:
        """Resolve a bearer token to an authenticated user."""
        return await self._core.services.access.authenticate(auth_token)

    async def register(
        self, name: str, email: str, password: str, user_agent: str | None = None, ip_address: str | None = None
    ) -> tuple[SessionData, UserView]:
        """Create a user account and log it in."""
        await self._core.services.access.ensure_database_ready()
        user = await self._core.services.user.create_user(name, email, password)
        session = await self._core.services.session.create_session(user.id, user_agent, ip_address)
        return session, UserView.from_domain(user)

    async def login(
        self, email: str, password: str, user_agent: str | None = None, ip_address: str | None = None
    ) -> tuple[SessionData, UserView]:
        """Authenticate user and create session."""
        await self._core.services.access.ensure_database_ready()
        user = await self._core.services.user.verify_password(email, password)
        if user is None:
            raise AuthenticationError("Invalid credentials")
        session = await self._core.services.session.create_session(user.id, user_agent, ip_address)
        return session, UserView.from_domain(user)

    async def logout(self, context: AuthContext) -> None:
        """Invalidate the current session."""
        await self._core.services.session.delete_session(context.session_token)

    async def logout_all(self, context: AuthContext) -> int:
        """Invalidate every session of the current user, returns how many were removed."""
        return await self._core.services.session.delete_all_user_sessions(context.user.id)

    async def get_user(self, user_id: UUID) -> UserView:
        """Get public profile of any user."""
        await self._core.services.access.ensure_database_ready()
        user = await self._core.services.user.get_user(user_id)
        return UserView.from_domain(user)

    async def update_profile(self, context: AuthContext, user_id: UUID, name: str, bio: str | None) -> UserView:
        """Update own profile (self only)."""
        await self._core.services.access.ensure_self(context, user_id)
        user = await self._core.services.user.update_profile(user_id, name, bio)
        return UserView.from_domain(user)

    async def is_database_ready(self) -> bool:
        """Ping the database."""
        return await self._core.mongo.ping()
