from typing import Annotated, cast

from fastapi import Depends, Request

from community.app import App
from community.core.modules.access.models import AuthContext
from community.core.modules.session.models import AuthToken
from community.errors import NoCredentialError

BEARER_PREFIX = "Bearer "


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


def extract_bearer_token(authorization: str | None) -> AuthToken:
    """Take the token out of an Authorization header, exact "Bearer " prefix required."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise NoCredentialError
    return AuthToken(authorization[len(BEARER_PREFIX) :])


async def get_auth_context(request: Request, app: Annotated[App, Depends(get_app)]) -> AuthContext:
    """Authenticate the request and attach the identity to request.state."""
    auth_token = extract_bearer_token(request.headers.get("Authorization"))
    context = await app.authenticate(auth_token)
    request.state.user = context.user
    request.state.session_token = context.session_token
    return context


def get_client_ip(request: Request) -> str | None:
    return request.client.host if request.client else None


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
AuthContextDep = Annotated[AuthContext, Depends(get_auth_context)]
