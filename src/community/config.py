from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str = "mongodb://127.0.0.1:27017/community"
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = []
    session_timeout_days: int = 7  # Default lifetime of a new session
    database_timeout_ms: int = 5000  # Server selection timeout, fail fast when MongoDB is down
    database_socket_timeout_ms: int = 45000
    database_max_pool_size: int = 10
    database_min_pool_size: int = 5
    forwarded_allow_ips: str = "127.0.0.1"  # Proxies trusted for X-Forwarded-For

    model_config = {
        "env_file": [".env"],
        "env_prefix": "COMMUNITY_",
        "extra": "ignore",
    }
