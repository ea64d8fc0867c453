from pydantic import BaseModel

from community.core.modules.session.models import AuthToken
from community.core.modules.user.models import User


class AuthContext(BaseModel):
    """Identity attached to an authenticated request."""

    user: User
    session_token: AuthToken
