from __future__ import annotations

from fastapi import FastAPI
from starlette.middleware.base import BaseHTTPMiddleware

from user_api import __version__
from user_api.core.config import Settings, get_settings
from user_api.core.errors import add_exception_handlers
from user_api.core.logging import get_logger, setup_logging
from user_api.db.create_tables import create_all
from user_api.db.session import engine_for, make_session_factory
from user_api.repositories.base import UserStore
from user_api.repositories.sql_repository import SQLUserRepository
from user_api.routers import users as users_router
from user_api.services.account_service import AccountService

log = get_logger("app")


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers on every JSON response."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Cache-Control", "no-store")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


def _default_repository(settings: Settings) -> SQLUserRepository:
    session_factory = make_session_factory(settings)
    if settings.database_url.startswith("sqlite"):
        create_all(engine_for(settings))
    return SQLUserRepository(session_factory=session_factory)


def create_app(settings: Settings | None = None, repository: UserStore | None = None) -> FastAPI:
    """Factory compatible with uvicorn/gunicorn (``uvicorn user_api.app:create_app --factory``)."""
    settings = settings or get_settings()
    setup_logging(settings)
    if not settings.jwt_secret_key:
        raise RuntimeError("JWT_SECRET_KEY must be configured.")
    if len(settings.jwt_secret_key) < 32:
        log.warning("JWT_SECRET_KEY should be at least 32 characters")

    app = FastAPI(title="User Account Service", version=__version__)
    app.state.settings = settings
    app.state.account_service = AccountService(
        repository=repository if repository is not None else _default_repository(settings),
        secret_key=settings.jwt_secret_key,
        token_ttl_seconds=settings.token_ttl_seconds,
    )

    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.is_production)
    add_exception_handlers(app)
    app.include_router(users_router.router)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    log.info("User account service ready (env=%s)", settings.app_env)
    return app
