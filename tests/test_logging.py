from __future__ import annotations

import json
import logging
import sys
from dataclasses import replace

import pytest

from user_api.core.logging import StructuredFormatter, mask_phone, setup_logging


@pytest.mark.parametrize(
    ("phone", "masked"),
    [
        ("+62123456789", "+62***89"),
        ("+6281234567890", "+62***90"),
        ("+6212", "***"),
        ("", "***"),
        (None, "***"),
    ],
)
def test_mask_phone(phone, masked):
    assert mask_phone(phone) == masked


def _record(msg, *args, exc_info=None, **extra) -> logging.LogRecord:
    record = logging.LogRecord("user_api.test", logging.ERROR, __file__, 42, msg, args, exc_info)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_structured_formatter_emits_one_json_object():
    line = StructuredFormatter().format(_record("login failed for %s", "+62***89", path="/user/login", method="POST"))

    payload = json.loads(line)
    assert payload["level"] == "ERROR"
    assert payload["logger"] == "user_api.test"
    assert payload["message"] == "login failed for +62***89"
    assert payload["line"] == 42
    assert payload["path"] == "/user/login"
    assert payload["method"] == "POST"
    assert "user_id" not in payload
    assert "exception" not in payload


def test_structured_formatter_includes_traceback():
    try:
        raise ValueError("bad hash")
    except ValueError:
        record = _record("boom", exc_info=sys.exc_info())

    payload = json.loads(StructuredFormatter().format(record))
    assert "ValueError: bad hash" in payload["exception"]


def test_setup_logging_uses_json_only_in_production(test_settings):
    prod_logger = setup_logging(replace(test_settings, app_env="prod"))
    assert isinstance(prod_logger.handlers[0].formatter, StructuredFormatter)

    dev_logger = setup_logging(test_settings)
    assert len(dev_logger.handlers) == 1
    assert not isinstance(dev_logger.handlers[0].formatter, StructuredFormatter)
    assert dev_logger.level == logging.WARNING
