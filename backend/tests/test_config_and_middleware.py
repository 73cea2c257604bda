"""
Cash Card Service — Settings & Middleware Helper Tests
========================================================

What:  Settings validation and the pure helpers used by the middleware.
"""

import base64
import logging

import pytest
from pydantic import ValidationError as SettingsValidationError
from starlette.requests import Request

from app.config import Settings
from app.middleware.logging import basic_auth_username, level_for_status
from app.middleware.request_id import new_request_id


def _request(headers=None):
    raw = [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()]
    return Request({"type": "http", "method": "GET", "path": "/", "headers": raw})


class TestSettings:
    """Settings parsing and validation."""

    def test_log_level_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_log_level_rejected(self):
        with pytest.raises(SettingsValidationError):
            Settings(log_level="LOUD")

    def test_in_memory_detection(self):
        assert Settings(database_url="sqlite+aiosqlite:///:memory:").is_in_memory
        assert not Settings(database_url="sqlite+aiosqlite:///./cards.db").is_in_memory
        assert not Settings(database_url="postgresql+asyncpg://u:p@db/cards").is_sqlite

    def test_cors_origins_list(self):
        s = Settings(cors_origins="http://a.test, http://b.test,")
        assert s.cors_origins_list == ["http://a.test", "http://b.test"]


class TestLoggingHelpers:
    """Access-log helpers."""

    def test_basic_auth_username(self):
        token = base64.b64encode(b"sarah1:abc123").decode()
        assert basic_auth_username(_request({"Authorization": f"Basic {token}"})) == "sarah1"

    @pytest.mark.parametrize(
        "header",
        ["", "Bearer abc", "Basic !!!not-base64!!!", "Basic " + base64.b64encode(b"nocolon").decode()],
    )
    def test_basic_auth_username_unreadable(self, header):
        headers = {"Authorization": header} if header else {}
        assert basic_auth_username(_request(headers)) == "-"

    def test_level_for_status(self):
        assert level_for_status(204) == logging.INFO
        assert level_for_status(404) == logging.WARNING
        assert level_for_status(500) == logging.ERROR

    def test_new_request_id_shape(self):
        rid = new_request_id()
        assert len(rid) == 8
        assert rid != new_request_id()
