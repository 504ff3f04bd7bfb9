from __future__ import annotations

import sys
import uuid
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Make the package importable when the tests run from a plain checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from user_api.app import create_app  # noqa: E402
from user_api.core.config import Settings  # noqa: E402
from user_api.core.security import hash_password  # noqa: E402
from user_api.domain.users import UserRecord  # noqa: E402
from user_api.repositories.base import StoreError  # noqa: E402
from user_api.repositories.memory_repository import InMemoryUserRepository  # noqa: E402
from user_api.services.account_service import AccountService  # noqa: E402

SECRET = "test-secret-for-testing-only-not-production"
KNOWN_PASSWORD = "correctPassword123!"


class FailingRepository(InMemoryUserRepository):
    """In-memory store whose listed operations raise StoreError."""

    def __init__(self, *fail_on: str) -> None:
        super().__init__()
        self.fail_on = set(fail_on)

    def _maybe_fail(self, name: str) -> None:
        if name in self.fail_on:
            raise StoreError(f"{name} exploded")

    def get_user_by_phone(self, phone_number):
        self._maybe_fail("get_user_by_phone")
        return super().get_user_by_phone(phone_number)

    def get_user_by_id(self, user_id):
        self._maybe_fail("get_user_by_id")
        return super().get_user_by_id(user_id)

    def insert_user(self, user):
        self._maybe_fail("insert_user")
        super().insert_user(user)

    def update_user(self, profile):
        self._maybe_fail("update_user")
        super().update_user(profile)

    def upsert_login_count(self, user_id, count):
        self._maybe_fail("upsert_login_count")
        super().upsert_login_count(user_id, count)


@pytest.fixture(scope="session")
def known_hash() -> str:
    return hash_password(KNOWN_PASSWORD)


@pytest.fixture()
def repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def make_user(known_hash):
    """Seed a user into any in-memory repository."""

    def _make(repository, phone_number="+62123456789", full_name="Kurumi Ruru", successful_logins=None):
        return repository.add(
            UserRecord(
                id=str(uuid.uuid4()),
                phone_number=phone_number,
                full_name=full_name,
                password_hash=known_hash,
                successful_logins=successful_logins,
            )
        )

    return _make


@pytest.fixture()
def service(repo) -> AccountService:
    return AccountService(repository=repo, secret_key=SECRET)


@pytest.fixture()
def test_settings() -> Settings:
    return Settings(
        app_env="test",
        database_url="sqlite://",
        jwt_secret_key=SECRET,
        token_ttl_seconds=120,
        db_timeout_seconds=5,
        log_level="WARNING",
    )


@pytest.fixture()
def client(test_settings, repo):
    app = create_app(test_settings, repository=repo)
    with TestClient(app) as c:
        yield c
