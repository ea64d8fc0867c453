import logging

from fastapi import Request
from fastapi.responses import JSONResponse, Response

from community.errors import (
    AccessDeniedError,
    AuthenticationError,
    InvalidSessionError,
    NoCredentialError,
    NotFoundError,
    ServiceUnavailableError,
    UserNotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def create_json_error_response(status_code: int, message: str, error_type: str | None = None) -> JSONResponse:
    """Create JSON error response with optional type for machine parsing."""
    content = {"message": message}
    if error_type:
        content["type"] = error_type
    return JSONResponse(status_code=status_code, content=content)


def classify_user_error(exc: Exception) -> tuple[int, str]:
    """Status code and machine-readable type for a UserError.

    Authentication failures share 401 but keep distinct types, so clients can
    tell "log in again" apart from "retry later" (503).
    """
    if isinstance(exc, NoCredentialError):
        return 401, "no_credential"
    if isinstance(exc, InvalidSessionError):
        return 401, "invalid_session"
    if isinstance(exc, UserNotFoundError):
        return 401, "user_not_found"
    if isinstance(exc, AuthenticationError):
        return 401, "authentication_error"
    if isinstance(exc, ServiceUnavailableError):
        return 503, "service_unavailable"
    if isinstance(exc, AccessDeniedError):
        return 403, "access_denied"
    if isinstance(exc, NotFoundError):
        return 404, "not_found"
    if isinstance(exc, ValidationError):
        return 400, "validation_error"
    return 400, "bad_request"


async def user_error_handler(_: Request, exc: Exception) -> Response:
    """Handle all UserError subclasses with appropriate status codes."""
    status_code, error_type = classify_user_error(exc)
    response = create_json_error_response(status_code=status_code, message=str(exc), error_type=error_type)
    if status_code == 401:
        response.headers["WWW-Authenticate"] = "Bearer"
    return response


async def general_exception_handler(_: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500)."""
    logger.exception("Unexpected error: %s", exc)
    return create_json_error_response(
        status_code=500, message="An unexpected error occurred.", error_type="internal_server_error"
    )
