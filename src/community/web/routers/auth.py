from datetime import datetime

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from community.core.modules.user.models import UserView
from community.web.deps import AppDep, AuthContextDep, get_client_ip
from community.web.openapi import ErrorResponse

router = APIRouter(tags=["auth"])


class RegisterRequest(BaseModel):
    """Registration request."""

    name: str = Field(..., min_length=1, description="Display name")
    email: str = Field(..., min_length=1, description="Email address, used to log in")
    password: str = Field(..., min_length=1, description="Password")


class LoginRequest(BaseModel):
    """Authentication request."""

    email: str = Field(..., description="Email for authentication")
    password: str = Field(..., description="Password for authentication")


class SessionResponse(BaseModel):
    """Issued session together with the user it belongs to."""

    token: str = Field(..., description="Session token for the Authorization: Bearer header")
    expires_at: datetime = Field(..., description="Session expiry time (UTC)")
    user: UserView


class LogoutAllResponse(BaseModel):
    sessions_cleared: int = Field(..., description="Number of sessions that were removed")


@router.post(
    "/auth/register",
    summary="Register user",
    description="Create an account and receive a session token.",
    operation_id="register",
    status_code=201,
    responses={
        201: {"description": "User registered"},
        400: {"model": ErrorResponse, "description": "Invalid input or user already exists"},
        503: {"model": ErrorResponse, "description": "Database not available"},
    },
)
async def register(register_data: RegisterRequest, app: AppDep, request: Request) -> SessionResponse:
    session, user = await app.register(
        register_data.name,
        register_data.email,
        register_data.password,
        user_agent=request.headers.get("user-agent"),
        ip_address=get_client_ip(request),
    )
    return SessionResponse(token=session.token, expires_at=session.expires_at, user=user)


@router.post(
    "/auth/login",
    summary="Authenticate user",
    description="Authenticate with email and password to receive a session token.",
    operation_id="login",
    responses={
        200: {"description": "Successfully authenticated"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
        503: {"model": ErrorResponse, "description": "Database not available"},
    },
)
async def login(login_data: LoginRequest, app: AppDep, request: Request) -> SessionResponse:
    """Authenticate user and create session."""
    session, user = await app.login(
        login_data.email,
        login_data.password,
        user_agent=request.headers.get("user-agent"),
        ip_address=get_client_ip(request),
    )
    return SessionResponse(token=session.token, expires_at=session.expires_at, user=user)


@router.get(
    "/auth/me",
    summary="Get current user",
    description="Get the user owning the presented session token.",
    operation_id="getCurrentUser",
    responses={
        200: {"description": "Current user"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        503: {"model": ErrorResponse, "description": "Database not available"},
    },
)
async def me(context: AuthContextDep) -> UserView:
    return UserView.from_domain(context.user)


@router.post(
    "/auth/logout",
    summary="End session",
    description="Invalidate the current session.",
    operation_id="logout",
    status_code=204,
    responses={
        204: {"description": "Successfully logged out"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def logout(app: AppDep, context: AuthContextDep) -> None:
    await app.logout(context)


@router.post(
    "/auth/logout-all",
    summary="End all sessions",
    description="Invalidate every session of the current user on all devices.",
    operation_id="logoutAll",
    responses={
        200: {"description": "All sessions removed"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def logout_all(app: AppDep, context: AuthContextDep) -> LogoutAllResponse:
    return LogoutAllResponse(sessions_cleared=await app.logout_all(context))
