"""
Error kinds raised by the account workflow and their HTTP translation.

The workflow raises a single exception type, AccountError, tagged with an
ErrorKind. add_exception_handlers() registers the only place where kinds are
turned into status codes and JSON bodies of the form {"messages": [...]}.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import get_settings
from .logging import get_logger

log = get_logger("errors")

INVALID_BODY_MESSAGE = "Invalid request body"
FORBIDDEN_MESSAGE = "Forbidden"
INTERNAL_MESSAGE = "Internal server error"


class ErrorKind(str, Enum):
    BAD_REQUEST = "bad_request"
    FORBIDDEN = "forbidden"
    CONFLICT = "conflict"
    INTERNAL = "internal"


DEFAULT_STATUS = {
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.CONFLICT: 409,
    ErrorKind.INTERNAL: 500,
}


class AccountError(Exception):
    """A terminal outcome of one workflow stage."""

    def __init__(self, kind: ErrorKind, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self._status_code = status_code

    @property
    def status_code(self) -> int:
        return self._status_code or DEFAULT_STATUS[self.kind]

    @classmethod
    def forbidden(cls) -> "AccountError":
        return cls(ErrorKind.FORBIDDEN, FORBIDDEN_MESSAGE)

    @classmethod
    def internal(cls, exc: BaseException | str) -> "AccountError":
        return cls(ErrorKind.INTERNAL, str(exc) or INTERNAL_MESSAGE)


# Human readable rendering of pydantic error types, one message per violated rule.
VALIDATION_MESSAGES = {
    "missing": "{field} is required.",
    "string_too_short": "{field} must be at least {min_length} characters long.",
    "string_too_long": "{field} must not exceed {max_length} characters.",
    "string_type": "{field} must be a string.",
    "startswith": "{field} must start with '{prefix}'.",
    "password": (
        "{field} must meet password criteria. Minimum 6 characters, maximum 64 characters, "
        "containing at least 1 capital characters AND 1 number AND 1 special (non-alpha-numeric) characters."
    ),
}


def translate_validation_errors(errors: Iterable[dict[str, Any]]) -> list[str]:
    messages: list[str] = []
    for err in errors:
        loc = tuple(err.get("loc") or ())
        err_type = err.get("type", "")
        if err_type == "json_invalid" or not loc or loc == ("body",):
            # the body itself is unusable (not JSON, not an object, absent)
            message = INVALID_BODY_MESSAGE
        else:
            field = str(loc[-1])
            template = VALIDATION_MESSAGES.get(err_type, "{field} is invalid.")
            ctx = {k: v for k, v in (err.get("ctx") or {}).items() if isinstance(v, (str, int))}
            try:
                message = template.format(field=field, **ctx)
            except KeyError:
                message = f"{field} is invalid."
        if message not in messages:
            messages.append(message)
    return messages or [INVALID_BODY_MESSAGE]


def _is_production(request: Request) -> bool:
    settings = getattr(request.app.state, "settings", None) or get_settings()
    return settings.is_production


def error_response(status_code: int, messages: list[str]) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"messages": messages})


def add_exception_handlers(app: FastAPI) -> None:
    """Register the boundary translators on the app."""

    @app.exception_handler(AccountError)
    async def account_error_handler(request: Request, exc: AccountError):
        message = exc.message
        if exc.kind is ErrorKind.INTERNAL:
            log.error("%s %s failed: %s", request.method, request.url.path, exc.message)
            if _is_production(request):
                message = INTERNAL_MESSAGE
        return error_response(exc.status_code, [message])

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return error_response(400, translate_validation_errors(exc.errors()))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, [str(exc.detail)])

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        log.error(
            "Unhandled exception: %s",
            exc,
            extra={"method": request.method, "path": request.url.path},
            exc_info=True,
        )
        message = INTERNAL_MESSAGE if _is_production(request) else str(exc) or INTERNAL_MESSAGE
        return error_response(500, [message])
