"""Request/response schemas for the /user endpoints."""

from __future__ import annotations

from typing import Annotated, Optional

from pydantic import BaseModel, Field, StringConstraints, field_validator
from pydantic_core import PydanticCustomError

from user_api.domain.users import (
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    PHONE_MAX_LENGTH,
    PHONE_MIN_LENGTH,
    PHONE_PREFIX,
    is_valid_password,
)

PhoneNumber = Annotated[str, StringConstraints(min_length=PHONE_MIN_LENGTH, max_length=PHONE_MAX_LENGTH)]
FullName = Annotated[str, StringConstraints(min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)]


def check_phone_prefix(value: Optional[str]) -> Optional[str]:
    if value is not None and not value.startswith(PHONE_PREFIX):
        raise PydanticCustomError("startswith", "must start with '{prefix}'", {"prefix": PHONE_PREFIX})
    return value


class UserRegisterRequest(BaseModel):
    phone_number: PhoneNumber
    password: str = Field(..., description="6-64 bytes, 1 uppercase, 1 digit, 1 special character")
    full_name: FullName

    @field_validator("phone_number")
    @classmethod
    def phone_prefix(cls, v: str) -> str:
        return check_phone_prefix(v)

    @field_validator("password")
    @classmethod
    def password_rules(cls, v: str) -> str:
        if not is_valid_password(v):
            raise PydanticCustomError("password", "does not meet password criteria")
        return v


class UserLoginRequest(BaseModel):
    phone_number: str
    password: str

    @field_validator("phone_number", "password")
    @classmethod
    def not_blank(cls, v: str) -> str:
        # an empty string counts as a missing field
        if not v:
            raise PydanticCustomError("missing", "Field required")
        return v


class UserUpdateRequest(BaseModel):
    """Partial profile update; absent fields are left untouched."""

    phone_number: Optional[PhoneNumber] = None
    full_name: Optional[FullName] = None

    @field_validator("phone_number")
    @classmethod
    def phone_prefix(cls, v: Optional[str]) -> Optional[str]:
        return check_phone_prefix(v)


class UserRegisterResponse(BaseModel):
    id: str


class UserLoginResponse(BaseModel):
    id: str
    token: str


class UserProfileResponse(BaseModel):
    full_name: str
    phone_number: str


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    messages: list[str]
