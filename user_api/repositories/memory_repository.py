"""
Dict-backed UserStore.

Used by the workflow tests and by local runs without a database. Every
mutating call is appended to ``calls`` so tests can assert on what was (or
was not) written.
"""

from __future__ import annotations

import threading
from dataclasses import replace

from user_api.domain.users import NewUser, ProfileUpdate, UserRecord

from .base import UserNotFoundError


class InMemoryUserRepository:
    def __init__(self) -> None:
        self._users: dict[str, UserRecord] = {}
        self._lock = threading.Lock()
        self.calls: list[tuple[str, object]] = []

    def add(self, record: UserRecord) -> UserRecord:
        """Seed a record directly, bypassing the call log."""
        with self._lock:
            self._users[record.id] = record
        return record

    def get_user_by_phone(self, phone_number: str) -> UserRecord:
        with self._lock:
            for record in self._users.values():
                if record.phone_number == phone_number:
                    return record
        raise UserNotFoundError("user not found")

    def get_user_by_id(self, user_id: str) -> UserRecord:
        with self._lock:
            record = self._users.get(user_id)
        if record is None:
            raise UserNotFoundError("user not found")
        return record

    def insert_user(self, user: NewUser) -> None:
        self.calls.append(("insert_user", user))
        with self._lock:
            self._users[user.id] = UserRecord(
                id=user.id,
                phone_number=user.phone_number,
                full_name=user.full_name,
                password_hash=user.password_hash,
            )

    def update_user(self, profile: ProfileUpdate) -> None:
        self.calls.append(("update_user", profile))
        with self._lock:
            current = self._users.get(profile.id)
            if current is not None:
                self._users[profile.id] = replace(current, phone_number=profile.phone_number, full_name=profile.full_name)

    def upsert_login_count(self, user_id: str, count: int) -> None:
        self.calls.append(("upsert_login_count", (user_id, count)))
        with self._lock:
            current = self._users.get(user_id)
            if current is not None:
                self._users[user_id] = replace(current, successful_logins=count)

    def mutations(self) -> list[str]:
        return [name for name, _ in self.calls]
