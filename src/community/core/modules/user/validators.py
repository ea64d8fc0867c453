from community.errors import ValidationError
from community.utils import is_email

MAX_NAME_LENGTH = 50
MAX_BIO_LENGTH = 500
MIN_PASSWORD_LENGTH = 6
# bcrypt only accepts passwords up to 72 bytes
MAX_PASSWORD_BYTES = 72


def validate_password(password: str) -> None:
    """Validate password meets requirements.

    Requirements:
    - No whitespace characters
    - Minimum length of 6 characters
    - At most 72 bytes once UTF-8 encoded

    Raises:
        ValidationError: If password doesn't meet requirements
    """
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")

    if any(char.isspace() for char in password):
        raise ValidationError("Password cannot contain whitespace characters")

    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password cannot be longer than {MAX_PASSWORD_BYTES} bytes")


def normalize_name(name: str) -> str:
    """Trim and check a display name."""
    name = name.strip()
    if not name:
        raise ValidationError("Name is required")
    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError(f"Name cannot be more than {MAX_NAME_LENGTH} characters")
    return name


def normalize_email(email: str) -> str:
    email = email.strip().lower()
    if not is_email(email):
        raise ValidationError("Invalid email address")
    return email


def normalize_bio(bio: str | None) -> str:
    if bio is None:
        return ""
    if len(bio) > MAX_BIO_LENGTH:
        raise ValidationError(f"Bio cannot be more than {MAX_BIO_LENGTH} characters")
    return bio.strip()
