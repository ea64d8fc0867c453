from community.web.routers.auth import router as auth_router
from community.web.routers.health import router as health_router
from community.web.routers.users import router as users_router

__all__ = [
    "auth_router",
    "health_router",
    "users_router",
]
