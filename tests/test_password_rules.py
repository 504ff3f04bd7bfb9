from __future__ import annotations

import pytest
from pydantic import ValidationError

from user_api.core.errors import translate_validation_errors
from user_api.domain.users import is_valid_password
from user_api.schemas import UserRegisterRequest, UserUpdateRequest


@pytest.mark.parametrize("password", ["Pass123!", "Aa1!aa", "X9#" + "y" * 61])
def test_accepts_valid_passwords(password):
    assert is_valid_password(password) is True


@pytest.mark.parametrize(
    "password",
    [
        "hagasaurus",  # no upper, digit or special
        "ha",  # too short
        "Hagasaurus",  # no digit
        "Hagasaurus12",  # no special character
        "hagasaurus1!",  # no upper
        "X9#" + "y" * 62,  # 65 characters
        "",
        None,
    ],
)
def test_rejects_invalid_passwords(password):
    assert is_valid_password(password) is False


def _messages(model, **data):
    with pytest.raises(ValidationError) as excinfo:
        model(**data)
    return translate_validation_errors(excinfo.value.errors())


def test_register_reports_one_message_per_rule():
    messages = _messages(UserRegisterRequest, full_name="Ha", password="hagasaurus", phone_number="+6780909080123")

    assert "full_name must be at least 3 characters long." in messages
    assert "phone_number must start with '+62'." in messages
    assert any(m.startswith("password must meet password criteria.") for m in messages)
    assert len(messages) == 3


def test_register_reports_missing_and_too_long_fields():
    messages = _messages(UserRegisterRequest, phone_number="+62" + "1" * 20)

    assert "phone_number must not exceed 15 characters." in messages
    assert "password is required." in messages
    assert "full_name is required." in messages


def test_update_request_fields_are_optional():
    body = UserUpdateRequest()
    assert body.phone_number is None and body.full_name is None

    messages = _messages(UserUpdateRequest, phone_number="0812345678901")
    assert messages == ["phone_number must start with '+62'."]


def test_password_length_counts_utf8_bytes():
    # five characters, six bytes
    assert is_valid_password("Ab1!é") is True
    # sixty-four characters, sixty-five bytes
    assert is_valid_password("X9#é" + "y" * 60) is False
