"""Store contract shared by every persistence adapter."""
from __future__ import annotations

from typing import Protocol

from user_api.domain.users import NewUser, ProfileUpdate, UserRecord


class StoreError(Exception):
    """Infrastructure failure while talking to the store."""


class UserNotFoundError(LookupError):
    """No user matches the lookup. Distinct from StoreError on purpose."""


class UserStore(Protocol):
    """Keyed by id, with a secondary lookup by phone number. Enforces no business rules."""

    def get_user_by_phone(self, phone_number: str) -> UserRecord:
        """Return the user owning phone_number or raise UserNotFoundError."""
        ...

    def get_user_by_id(self, user_id: str) -> UserRecord:
        """Return the user with user_id or raise UserNotFoundError."""
        ...

    def insert_user(self, user: NewUser) -> None:
        ...

    def update_user(self, profile: ProfileUpdate) -> None:
        ...

    def upsert_login_count(self, user_id: str, count: int) -> None:
        ...
