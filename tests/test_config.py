"""Tests for settings loaded from the environment."""

import logging

import pytest

from textual_overlays import config
from textual_overlays.config import Settings, configure_logging, get_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("LOG_LEVEL", "NOTIFY_UNCHANGED", "INITIAL_COUNT"):
        monkeypatch.delenv(config.ENV_PREFIX + name, raising=False)
    monkeypatch.setattr(config, "_settings", None)


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self):
        settings = Settings.from_env()

        assert settings == Settings(
            log_level="WARNING", notify_unchanged=True, initial_count=0
        )

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("TEXTUAL_OVERLAYS_LOG_LEVEL", "debug")
        monkeypatch.setenv("TEXTUAL_OVERLAYS_NOTIFY_UNCHANGED", "off")
        monkeypatch.setenv("TEXTUAL_OVERLAYS_INITIAL_COUNT", "-3")

        settings = Settings.from_env()

        assert settings.log_level == "DEBUG"
        assert settings.notify_unchanged is False
        assert settings.initial_count == -3

    def test_invalid_bool(self, monkeypatch):
        monkeypatch.setenv("TEXTUAL_OVERLAYS_NOTIFY_UNCHANGED", "maybe")

        with pytest.raises(ValueError, match="NOTIFY_UNCHANGED must be a boolean"):
            Settings.from_env()

    def test_invalid_int(self, monkeypatch):
        monkeypatch.setenv("TEXTUAL_OVERLAYS_INITIAL_COUNT", "ten")

        with pytest.raises(ValueError, match="INITIAL_COUNT must be an integer"):
            Settings.from_env()

    def test_invalid_log_level(self):
        with pytest.raises(ValueError, match="Unknown log level"):
            Settings(log_level="LOUD")

    def test_get_settings_is_cached(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("TEXTUAL_OVERLAYS_INITIAL_COUNT", "9")

        assert get_settings() is first
        assert first.initial_count == 0


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_applies_level(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

        configure_logging(Settings(log_level="info"))

        assert calls[0]["level"] == "INFO"
