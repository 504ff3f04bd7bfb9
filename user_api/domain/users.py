"""Domain records and input rules for user accounts."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 64
PHONE_PREFIX = "+62"
PHONE_MIN_LENGTH = 10
PHONE_MAX_LENGTH = 15
NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 60

_UPPER = re.compile(r"[A-Z]")
_DIGIT = re.compile(r"[0-9]")
_SPECIAL = re.compile(r"[^a-zA-Z0-9]")


@dataclass(frozen=True)
class UserRecord:
    id: str
    phone_number: str
    full_name: str
    password_hash: str
    successful_logins: Optional[int] = None


@dataclass(frozen=True)
class NewUser:
    id: str
    phone_number: str
    full_name: str
    password_hash: str


@dataclass
class ProfileUpdate:
    """Draft of the editable profile fields, pre-filled with the stored values."""

    id: str
    phone_number: str
    full_name: str


def is_valid_password(value: str | None) -> bool:
    """6-64 bytes (UTF-8) with at least one uppercase letter, one digit and one non-alphanumeric character."""
    if not value:
        return False
    if not PASSWORD_MIN_LENGTH <= len(value.encode("utf-8")) <= PASSWORD_MAX_LENGTH:
        return False
    return bool(_UPPER.search(value) and _DIGIT.search(value) and _SPECIAL.search(value))
