"""
Bearer token issuance and verification (PyJWT, HS256).

Token payload:
- id: user UUID
- exp: expiry timestamp (issued_at + TTL)

Tokens are stateless. There is no revocation list; expiry is the only way a
token stops being accepted. The default TTL is deliberately short.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt

from .logging import get_logger

log = get_logger("tokens")

ALGORITHM = "HS256"
TOKEN_TTL_SECONDS = 120
BEARER_PREFIX = "Bearer "


class TokenError(Exception):
    """Base class for every reason a presented credential is rejected."""


class MissingTokenError(TokenError):
    pass


class MalformedTokenError(TokenError):
    pass


class InvalidTokenError(TokenError):
    """Bad signature, expired, or claims we cannot use."""


class TokenIssueError(Exception):
    """The token could not be signed."""


def issue_token(subject_id: str, secret: str, ttl_seconds: int = TOKEN_TTL_SECONDS) -> str:
    if not secret:
        raise TokenIssueError("signing secret is not configured")
    expires_at = datetime.now(timezone.utc) + timedelta(seconds=ttl_seconds)
    payload = {"id": subject_id, "exp": expires_at}
    try:
        return jwt.encode(payload, secret, algorithm=ALGORITHM)
    except (jwt.PyJWTError, TypeError) as exc:
        raise TokenIssueError(str(exc)) from exc


def extract_bearer_token(header_value: str | None) -> str:
    """Return the credential part of an ``Authorization: Bearer <token>`` header."""
    if not header_value:
        raise MissingTokenError("missing bearer token")
    if not header_value.startswith(BEARER_PREFIX):
        raise MalformedTokenError("authorization header does not use the Bearer scheme")
    token = header_value[len(BEARER_PREFIX):]
    if not token:
        raise MalformedTokenError("empty bearer token")
    return token


def verify_token(token: str, secret: str) -> str:
    """Return the subject id carried by a valid, unexpired token."""
    if not secret:
        raise InvalidTokenError("signing secret is not configured")
    try:
        payload = jwt.decode(token, secret, algorithms=[ALGORITHM], options={"require": ["exp"]})
    except jwt.ExpiredSignatureError as exc:
        raise InvalidTokenError("token expired") from exc
    except jwt.InvalidTokenError as exc:
        raise InvalidTokenError(f"invalid token: {str(exc)[:50]}") from exc
    subject = payload.get("id")
    if not isinstance(subject, str) or not subject:
        raise InvalidTokenError("token has no subject id")
    return subject


def subject_from_header(header_value: str | None, secret: str) -> str:
    return verify_token(extract_bearer_token(header_value), secret)
