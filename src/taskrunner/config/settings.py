"""Configuration settings using Pydantic Settings.

Usage:
    from taskrunner.config import DispatcherSettings

    # Load from environment variables (TASKRUNNER_*)
    settings = DispatcherSettings()

    # Or override with explicit values
    settings = DispatcherSettings(strict=False, log_level="DEBUG")
"""

from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class DispatcherSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for dispatchers and the command line runner.

    Attributes:
        strict: Raise faults instead of reporting them and continuing.
        log_level: Logging level name used by the command line runner.
        json_indent: Indentation of the JSON stats output (None for compact).

    Environment Variables:
        TASKRUNNER_STRICT
        TASKRUNNER_LOG_LEVEL
        TASKRUNNER_JSON_INDENT
    """

    model_config = SettingsConfigDict(
        env_prefix="TASKRUNNER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    strict: bool = True
    log_level: str = "WARNING"
    json_indent: int | None = 2

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}, got {value!r}")
        return level
