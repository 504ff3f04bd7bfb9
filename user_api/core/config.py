"""
Configuration helpers for the user account service.

Routers and services never read os.environ directly; they receive a
Settings instance (or values taken from it) at construction time.
"""

from dataclasses import dataclass
from functools import lru_cache
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_url: str
    jwt_secret_key: str
    token_ttl_seconds: int
    db_timeout_seconds: int
    log_level: str

    @property
    def is_production(self) -> bool:
        return self.app_env == "prod"


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        database_url=os.getenv("DATABASE_URL", "sqlite:///./users.db").strip(),
        jwt_secret_key=os.getenv("JWT_SECRET_KEY", "").strip(),
        token_ttl_seconds=_int(os.getenv("TOKEN_TTL_SECONDS", "120"), 120),
        db_timeout_seconds=_int(os.getenv("DB_TIMEOUT_SECONDS", "5"), 5),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
