from __future__ import annotations

import jwt
import pytest

from user_api.core.tokens import (
    InvalidTokenError,
    MalformedTokenError,
    MissingTokenError,
    TokenIssueError,
    extract_bearer_token,
    issue_token,
    subject_from_header,
    verify_token,
)

SECRET = "token-tests-secret-with-enough-length!!"


def test_round_trip_returns_subject():
    token = issue_token("6a3c1f0e-user", SECRET)
    assert verify_token(token, SECRET) == "6a3c1f0e-user"


def test_expired_token_is_rejected():
    token = issue_token("6a3c1f0e-user", SECRET, ttl_seconds=-1)
    with pytest.raises(InvalidTokenError):
        verify_token(token, SECRET)


def test_wrong_secret_is_rejected():
    token = issue_token("6a3c1f0e-user", SECRET)
    with pytest.raises(InvalidTokenError):
        verify_token(token, "another-secret-another-secret-xx")


def test_token_without_subject_is_rejected():
    token = jwt.encode({"exp": 4102444800}, SECRET, algorithm="HS256")
    with pytest.raises(InvalidTokenError):
        verify_token(token, SECRET)


def test_token_without_expiry_is_rejected():
    token = jwt.encode({"id": "abc"}, SECRET, algorithm="HS256")
    with pytest.raises(InvalidTokenError):
        verify_token(token, SECRET)


def test_issue_requires_secret():
    with pytest.raises(TokenIssueError):
        issue_token("abc", "")


@pytest.mark.parametrize("header", [None, ""])
def test_missing_header(header):
    with pytest.raises(MissingTokenError):
        extract_bearer_token(header)


@pytest.mark.parametrize("header", ["Bear random", "bearer random", "Bearer ", "Token abc", "Bearer"])
def test_malformed_header(header):
    with pytest.raises(MalformedTokenError):
        extract_bearer_token(header)


def test_subject_from_header():
    token = issue_token("user-1", SECRET)
    assert extract_bearer_token(f"Bearer {token}") == token
    assert subject_from_header(f"Bearer {token}", SECRET) == "user-1"
    with pytest.raises(InvalidTokenError):
        subject_from_header("Bearer random", SECRET)
