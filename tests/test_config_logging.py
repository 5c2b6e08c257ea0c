"""Configuration classes, app factory wiring and logging setup."""

import json
import logging

import pytest

from ListingMVP.ai import OpenAIGenerator
from ListingMVP.app import create_app
from ListingMVP.config import Config, TestingConfig, _env_flag
from ListingMVP.exceptions import ConfigurationError
from ListingMVP.services.storage import MemStorage
from ListingMVP.utils.logging import JsonFormatter, setup_logging


class TestConfig:
    def test_testing_overrides(self) -> None:
        assert TestingConfig.TESTING is True
        assert TestingConfig.SESSION_COOKIE_SECURE is False
        assert TestingConfig.MAIL_SUPPRESS_SEND is True
        assert TestingConfig.OPENAI_API_KEY == ""

    def test_defaults(self) -> None:
        assert Config.AI_MAX_TOKENS > 0
        assert 0 <= Config.AI_TEMPERATURE <= 2
        assert Config.SESSION_COOKIE_HTTPONLY is True

    @pytest.mark.parametrize("raw,expected", [("1", True), ("TRUE", True), ("yes", True), ("0", False), ("", False)])
    def test_env_flag(self, monkeypatch, raw, expected) -> None:
        monkeypatch.setenv("LISTINGMVP_FLAG", raw)
        assert _env_flag("LISTINGMVP_FLAG") is expected


class TestAppFactory:
    def test_builds_generator_from_config(self) -> None:
        app = create_app(TestingConfig, store=MemStorage(seed=False))

        assert isinstance(app.assistant.generator, OpenAIGenerator)
        assert app.store.get_all_properties() == []

    def test_missing_key_is_500_on_first_call(self) -> None:
        app = create_app(TestingConfig)
        client = app.test_client()
        client.post("/api/register", json={"username": "jane", "password": "pw"})

        resp = client.post("/api/chat", json={"messages": [{"role": "user", "content": "Hi"}]})

        assert resp.status_code == 500
        assert "OPENAI_API_KEY" in resp.get_json()["error"]

    def test_unknown_provider_fails_fast(self) -> None:
        class BadProvider(TestingConfig):
            AI_PROVIDER = "llama"

        with pytest.raises(ConfigurationError):
            create_app(BadProvider)

    def test_blueprints_registered(self, app) -> None:
        assert {"auth", "property", "ai", "export", "system"} <= set(app.blueprints)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestLogging:
    def test_setup_replaces_handlers(self, restore_root_logger) -> None:
        setup_logging("debug")

        assert restore_root_logger.level == logging.DEBUG
        assert len(restore_root_logger.handlers) == 1
        assert logging.getLogger("botocore").level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self, restore_root_logger) -> None:
        setup_logging("chatty")
        assert restore_root_logger.level == logging.INFO

    def test_json_format(self, restore_root_logger) -> None:
        setup_logging("INFO", "json")
        assert isinstance(restore_root_logger.handlers[0].formatter, JsonFormatter)

    def test_json_formatter_output(self) -> None:
        record = logging.LogRecord("ListingMVP.test", logging.WARNING, __file__, 1, "listing %d", (7,), None)

        data = json.loads(JsonFormatter().format(record))

        assert data["level"] == "WARNING"
        assert data["logger"] == "ListingMVP.test"
        assert data["message"] == "listing 7"
        assert "timestamp" in data
