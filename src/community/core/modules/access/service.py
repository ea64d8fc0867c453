from uuid import UUID

import structlog
from pymongo.errors import PyMongoError

from community.core.core import Service
from community.core.modules.access.models import AuthContext
from community.core.modules.session.models import AuthToken
from community.errors import (
    AccessDeniedError,
    AuthenticationError,
    InvalidSessionError,
    ServiceUnavailableError,
    UserError,
    UserNotFoundError,
)

logger = structlog.get_logger(__name__)


class AccessService(Service):
    async def ensure_database_ready(self) -> None:
        """Raise ServiceUnavailableError when the database does not answer.

        Also starts the services if startup happened during an outage.
        """
        if not await self.core.mongo.ping():
            raise ServiceUnavailableError
        await self.core.ensure_services_started()

    async def authenticate(self, auth_token: AuthToken) -> AuthContext:
        """Resolve a bearer token to the session owner.

        Single pass: database readiness, session validation, user lookup.
        Every failure becomes a UserError subclass, nothing else escapes.
        """
        try:
            return await self._authenticate(auth_token)
        except UserError:
            raise
        except PyMongoError as e:
            logger.warning("authentication_database_error", error=str(e))
            raise ServiceUnavailableError from e
        except Exception as e:
            logger.exception("authentication_failed")
            raise AuthenticationError from e

    async def ensure_self(self, context: AuthContext, user_id: UUID) -> None:
        """Ensure the authenticated user is the given user."""
        if context.user.id != user_id:
            raise AccessDeniedError("Not authorized to update this profile")

    async def _authenticate(self, auth_token: AuthToken) -> AuthContext:
        await self.ensure_database_ready()

        session = await self.core.services.session.validate_session(auth_token)
        if session is None:
            raise InvalidSessionError

        user = await self.core.services.user.find_by_id(session.user_id)
        if user is None:
            # User was removed after the session was issued
            await self.core.services.session.delete_session(auth_token)
            logger.info("orphaned_session_deleted", user_id=str(session.user_id))
            raise UserNotFoundError

        return AuthContext(user=user, session_token=auth_token)
