"""Engine/session helpers for the SQL backend."""
from __future__ import annotations

from contextlib import contextmanager
from functools import lru_cache, partial
from typing import Callable, ContextManager, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from user_api.core.config import Settings, get_settings

Base = declarative_base()


def _connect_args(url: str, timeout: int) -> dict:
    # Bound every store call: sqlite waits on locks, postgres on connect and statements.
    if url.startswith("sqlite"):
        return {"timeout": timeout, "check_same_thread": False}
    if url.startswith("postgresql"):
        return {"connect_timeout": timeout, "options": f"-c statement_timeout={timeout * 1000}"}
    return {}


@lru_cache
def get_engine(database_url: Optional[str] = None, timeout_seconds: Optional[int] = None):
    """Engine for ``database_url``, falling back to the environment settings."""
    if database_url is None:
        settings = get_settings()
        database_url = settings.database_url
        if timeout_seconds is None:
            timeout_seconds = settings.db_timeout_seconds
    url = (database_url or "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL must be configured to use the SQL backend.")
    timeout = max(1, timeout_seconds or 1)
    options = {"future": True, "connect_args": _connect_args(url, timeout)}
    if not url.startswith("sqlite"):
        options.update(pool_pre_ping=True, pool_timeout=timeout)
    return create_engine(url, **options)


def engine_for(settings: Settings):
    return get_engine(settings.database_url, settings.db_timeout_seconds)


@lru_cache
def _get_sessionmaker(*engine_args):
    return sessionmaker(bind=get_engine(*engine_args), autoflush=False, autocommit=False, future=True)


@contextmanager
def _session_scope(maker: sessionmaker) -> Session:
    session: Session = maker()
    try:
        yield session
    finally:
        session.close()


def get_session() -> ContextManager[Session]:
    return _session_scope(_get_sessionmaker())


def make_session_factory(settings: Settings) -> Callable[[], ContextManager[Session]]:
    """Session factory bound to the database named in ``settings``."""
    return partial(_session_scope, _get_sessionmaker(settings.database_url, settings.db_timeout_seconds))
