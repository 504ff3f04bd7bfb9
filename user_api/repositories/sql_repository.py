"""High-level data access helpers backed by SQLAlchemy."""
from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Callable, ContextManager, Iterator

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from user_api.db.models import User, UserLogin
from user_api.db.session import get_session
from user_api.domain.users import NewUser, ProfileUpdate, UserRecord

from .base import StoreError, UserNotFoundError


class SQLUserRepository:
    """UserStore implementation wrapping the SQLAlchemy session."""

    def __init__(self, session_factory: Callable[[], ContextManager[Session]] | None = None) -> None:
        self._session_factory = session_factory or get_session

    @contextmanager
    def _session(self) -> Iterator[Session]:
        try:
            with self._session_factory() as session:
                yield session
        except SQLAlchemyError as exc:
            raise StoreError(str(exc)) from exc

    def _lookup(self, *criteria) -> UserRecord:
        stmt = (
            select(User, UserLogin.num_of_successful_login)
            .outerjoin(UserLogin, UserLogin.user_id == User.id)
            .where(*criteria)
            .limit(1)
        )
        with self._session() as session:
            row = session.execute(stmt).first()
        if row is None:
            raise UserNotFoundError("user not found")
        user, logins = row
        return UserRecord(
            id=user.id,
            phone_number=user.phone_number,
            full_name=user.full_name,
            password_hash=user.password_hash,
            successful_logins=logins,
        )

    # -------------------------- lookups --------------------------
    def get_user_by_phone(self, phone_number: str) -> UserRecord:
        return self._lookup(User.phone_number == phone_number)

    def get_user_by_id(self, user_id: str) -> UserRecord:
        return self._lookup(User.id == user_id)

    # -------------------------- mutations --------------------------
    def insert_user(self, user: NewUser) -> None:
        now = datetime.now(timezone.utc)
        entity = User(
            id=user.id,
            phone_number=user.phone_number,
            full_name=user.full_name,
            password_hash=user.password_hash,
            created_at=now,
            updated_at=now,
        )
        with self._session() as session:
            session.add(entity)
            session.commit()

    def update_user(self, profile: ProfileUpdate) -> None:
        stmt = (
            update(User)
            .where(User.id == profile.id)
            .values(
                phone_number=profile.phone_number,
                full_name=profile.full_name,
                updated_at=datetime.now(timezone.utc),
            )
        )
        with self._session() as session:
            session.execute(stmt)
            session.commit()

    def upsert_login_count(self, user_id: str, count: int) -> None:
        entity = UserLogin(user_id=user_id, num_of_successful_login=count, updated_at=datetime.now(timezone.utc))
        with self._session() as session:
            session.merge(entity)
            session.commit()
