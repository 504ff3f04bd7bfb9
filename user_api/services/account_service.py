"""
Account use cases: registration, login and the bearer-protected profile.

Every method is a linear pipeline of guarded stages. A stage either advances
or raises AccountError; nothing is retried and nothing is rolled back. The
check-then-write sequences (phone lookup before insert, phone lookup before
update) are not atomic: two concurrent requests for the same phone number can
both pass the check. The UNIQUE index on users.phone_number is the backstop,
and a lost race surfaces as an internal error.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Optional

from user_api.core.errors import AccountError, ErrorKind
from user_api.core.logging import get_logger, mask_phone
from user_api.core.security import PasswordHashError, hash_password, verify_password
from user_api.core.tokens import TOKEN_TTL_SECONDS, TokenError, TokenIssueError, issue_token, subject_from_header
from user_api.domain.users import NewUser, ProfileUpdate, UserRecord
from user_api.repositories.base import StoreError, UserNotFoundError, UserStore

log = get_logger("account_service")

USER_EXISTS_MESSAGE = "User already exists"
USER_NOT_FOUND_MESSAGE = "User not found"
MISMATCHED_PASSWORD_MESSAGE = "Mismatched password"
EMPTY_BODY_MESSAGE = "Empty request body"
PHONE_EXISTS_MESSAGE = "Phone number exists"
PROFILE_UPDATED_MESSAGE = "Profile updated"


@dataclass
class RegisterResult:
    id: str


@dataclass
class LoginResult:
    id: str
    token: str


@dataclass
class Profile:
    full_name: str
    phone_number: str


@dataclass
class UpdateResult:
    changed: bool
    message: str = ""


@dataclass
class AccountService:
    """Handles registration, login and profile flows against an injected store."""

    repository: UserStore
    secret_key: str
    token_ttl_seconds: int = TOKEN_TTL_SECONDS

    # -------------------------------------- helpers --------------------------------------
    def _authenticate(self, authorization: Optional[str]) -> str:
        try:
            return subject_from_header(authorization, self.secret_key)
        except TokenError as exc:
            # the reason stays in the logs, the client always gets the same answer
            log.info("Rejected credential: %s", exc)
            raise AccountError.forbidden() from exc

    def _current_user(self, user_id: str) -> UserRecord:
        try:
            return self.repository.get_user_by_id(user_id)
        except UserNotFoundError as exc:
            # a valid token for a vanished account looks like any other bad token
            log.info("Token subject %s*** has no account", user_id[:8])
            raise AccountError.forbidden() from exc
        except StoreError as exc:
            raise AccountError.internal(exc) from exc

    # -------------------------------------- register --------------------------------------
    def register(self, phone_number: str, password: str, full_name: str) -> RegisterResult:
        try:
            existing = self.repository.get_user_by_phone(phone_number)
        except UserNotFoundError:
            existing = None
        except StoreError as exc:
            raise AccountError.internal(exc) from exc
        if existing is not None:
            raise AccountError(ErrorKind.CONFLICT, USER_EXISTS_MESSAGE, status_code=422)

        try:
            password_hash = hash_password(password)
        except PasswordHashError as exc:
            raise AccountError.internal(exc) from exc

        new_user = NewUser(
            id=str(uuid.uuid4()),
            phone_number=phone_number,
            full_name=full_name,
            password_hash=password_hash,
        )
        try:
            self.repository.insert_user(new_user)
        except StoreError as exc:
            raise AccountError.internal(exc) from exc

        log.info("User registered: %s", mask_phone(phone_number))
        return RegisterResult(id=new_user.id)

    # -------------------------------------- login --------------------------------------
    def login(self, phone_number: str, password: str) -> LoginResult:
        try:
            user = self.repository.get_user_by_phone(phone_number)
        except UserNotFoundError as exc:
            raise AccountError(ErrorKind.BAD_REQUEST, USER_NOT_FOUND_MESSAGE) from exc
        except StoreError as exc:
            raise AccountError.internal(exc) from exc

        try:
            matched = verify_password(password, user.password_hash)
        except PasswordHashError as exc:
            raise AccountError.internal(exc) from exc
        if not matched:
            raise AccountError(ErrorKind.BAD_REQUEST, MISMATCHED_PASSWORD_MESSAGE)

        try:
            token = issue_token(user.id, self.secret_key, self.token_ttl_seconds)
        except TokenIssueError as exc:
            raise AccountError.internal(exc) from exc

        # the token above stays valid even if the counter write fails
        try:
            self.repository.upsert_login_count(user.id, (user.successful_logins or 0) + 1)
        except StoreError as exc:
            raise AccountError.internal(exc) from exc

        log.info("User logged in: %s", mask_phone(phone_number))
        return LoginResult(id=user.id, token=token)

    # -------------------------------------- profile ---------------------------------------
    def get_profile(self, authorization: Optional[str]) -> Profile:
        user_id = self._authenticate(authorization)
        user = self._current_user(user_id)
        return Profile(full_name=user.full_name, phone_number=user.phone_number)

    def update_profile(
        self,
        authorization: Optional[str],
        phone_number: Optional[str] = None,
        full_name: Optional[str] = None,
    ) -> UpdateResult:
        user_id = self._authenticate(authorization)
        if phone_number is None and full_name is None:
            raise AccountError(ErrorKind.BAD_REQUEST, EMPTY_BODY_MESSAGE)

        user = self._current_user(user_id)
        draft = ProfileUpdate(id=user.id, phone_number=user.phone_number, full_name=user.full_name)
        phone_changed = phone_number is not None and phone_number != user.phone_number
        name_changed = full_name is not None and full_name != user.full_name
        if not (phone_changed or name_changed):
            return UpdateResult(changed=False)

        if phone_changed:
            try:
                owner = self.repository.get_user_by_phone(phone_number)
            except UserNotFoundError:
                owner = None
            except StoreError as exc:
                raise AccountError.internal(exc) from exc
            if owner is not None and owner.id != user.id:
                raise AccountError(ErrorKind.CONFLICT, PHONE_EXISTS_MESSAGE, status_code=409)
            draft.phone_number = phone_number
        if name_changed:
            draft.full_name = full_name

        try:
            self.repository.update_user(draft)
        except StoreError as exc:
            raise AccountError.internal(exc) from exc

        log.info("Profile updated for user %s***", user.id[:8])
        return UpdateResult(changed=True, message=PROFILE_UPDATED_MESSAGE)
