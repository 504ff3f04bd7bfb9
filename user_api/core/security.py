"""Security helpers (password hashing and verification)."""

from __future__ import annotations

from argon2 import PasswordHasher, exceptions as argon_exc

_ph = PasswordHasher()


class PasswordHashError(Exception):
    """Hashing or verification failed for a reason other than a wrong password."""


def hash_password(password: str) -> str:
    """Create a salted Argon2id hash."""
    try:
        return _ph.hash(password)
    except argon_exc.HashingError as exc:
        raise PasswordHashError(f"failed to hash password: {exc}") from exc


def verify_password(password: str, stored_hash: str | None) -> bool:
    """
    Compare a plaintext password with a stored hash in constant time.

    Returns False on a mismatch. Raises PasswordHashError when the stored hash
    cannot be read, so callers can tell a wrong password from a broken record.
    """
    if not stored_hash:
        raise PasswordHashError("stored password hash is empty")
    try:
        return _ph.verify(stored_hash, password)
    except argon_exc.VerifyMismatchError:
        return False
    except (argon_exc.InvalidHashError, argon_exc.VerificationError) as exc:
        raise PasswordHashError(f"failed to verify password: {exc}") from exc
