from abc import ABC


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str = "Document not found") -> None:
        super().__init__(message)


class AuthenticationError(UserError):
    """Raised when authentication fails."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message)


class NoCredentialError(AuthenticationError):
    """Raised when the request carries no usable bearer token."""

    def __init__(self, message: str = "No session token provided, authorization denied") -> None:
        super().__init__(message)


class InvalidSessionError(AuthenticationError):
    """Raised when the session token is unknown or expired."""

    def __init__(self, message: str = "Invalid or expired session") -> None:
        super().__init__(message)


class UserNotFoundError(AuthenticationError):
    """Raised when a valid session points to a user that no longer exists."""

    def __init__(self, message: str = "User not found") -> None:
        super().__init__(message)


class ServiceUnavailableError(UserError):
    """Raised when the database cannot be reached."""

    def __init__(self, message: str = "Database not available, please try again later") -> None:
        super().__init__(message)


class AccessDeniedError(UserError):
    """Raised when a user tries to access a resource they do not have permission for."""


class ValidationError(UserError):
    """Raised when user input fails validation."""
