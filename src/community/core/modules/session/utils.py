import secrets

from community.core.modules.session.models import AuthToken

TOKEN_BYTES = 32


def generate_session_token() -> AuthToken:
    """Random hex token from 256 bits of CSPRNG output."""
    return AuthToken(secrets.token_hex(TOKEN_BYTES))
