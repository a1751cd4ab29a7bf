"""Centralized configuration loading.

Reads TEXTUAL_OVERLAYS_* environment variables (a .env file is honored) into
a typed Settings object. Call configure_logging() early in entrypoints.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load .env once at import time
load_dotenv()

ENV_PREFIX = "TEXTUAL_OVERLAYS_"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _env(name: str, default: str) -> str:
    return os.getenv(ENV_PREFIX + name, default).strip()


def _parse_bool(name: str, raw: str) -> bool:
    lowered = raw.lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(f"{ENV_PREFIX}{name} must be a boolean, got {raw!r}")


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    # Logging
    log_level: str = "WARNING"

    # Store
    notify_unchanged: bool = True
    initial_count: int = 0

    def __post_init__(self) -> None:
        level = self.log_level.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {self.log_level!r}")
        object.__setattr__(self, "log_level", level)

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings from the current environment."""
        return cls(
            log_level=_env("LOG_LEVEL", cls.log_level),
            notify_unchanged=_parse_bool(
                "NOTIFY_UNCHANGED", _env("NOTIFY_UNCHANGED", "true")
            ),
            initial_count=_parse_int("INITIAL_COUNT", _env("INITIAL_COUNT", "0")),
        )


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the process-wide settings, reading the environment on first use."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def configure_logging(settings: Settings | None = None) -> None:
    """Apply the configured log level to the root logger."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
