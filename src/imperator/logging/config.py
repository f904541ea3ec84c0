# SPDX-FileCopyrightText: 2024-present Imperator contributors
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: imperator
"""
Settings for Imperator's logging.

Values come from ``IMPERATOR_LOGGING_*`` environment variables; nothing is
read until ``LoggingSettings.load()`` or ``configure_logging()`` is called.
"""

from __future__ import annotations

import logging
from enum import IntEnum
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(IntEnum):
    """Levels accepted by the settings, valued as their stdlib numbers."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


class LoggingSettings(BaseSettings):
    """Output options for the ``imperator`` logger tree."""

    model_config = SettingsConfigDict(
        env_prefix="IMPERATOR_LOGGING_",
        extra="ignore",
        case_sensitive=False,
    )

    level: LogLevel = Field(default=LogLevel.INFO, description="Threshold level")
    json_format: bool = Field(default=False, description="Emit one JSON object per record")
    include_timestamp: bool = Field(default=True, description="Prefix records with the time")
    include_level: bool = Field(default=True, description="Show the level name")
    console_enabled: bool = Field(default=True, description="Write to stdout")
    file_enabled: bool = Field(default=False, description="Write to file_path")
    file_path: Path | None = Field(default=None, description="Log file location")

    @field_validator("level", mode="before")
    @classmethod
    def parse_level(cls, v: Any) -> LogLevel:
        # Names are matched case-insensitively; "warn" is the stdlib alias
        if isinstance(v, LogLevel):
            return v
        if isinstance(v, str):
            name = v.strip().upper()
            if name == "WARN":
                name = "WARNING"
            if name in LogLevel.__members__:
                return LogLevel[name]
        raise ValueError(
            f"Invalid log level {v!r}; expected one of {', '.join(LogLevel.__members__)}"
        )

    @model_validator(mode="after")
    def check_file_output(self) -> LoggingSettings:
        if self.file_enabled and self.file_path is None:
            raise ValueError("file_path is required when file_enabled is set")
        return self

    @classmethod
    def load(cls) -> LoggingSettings:
        return cls()
