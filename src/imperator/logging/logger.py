# SPDX-FileCopyrightText: 2024-present Imperator contributors
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: imperator
"""
Logger implementation for Imperator.

This module provides the default logger implementation based on Python's
standard logging module, enhanced with structured logging capabilities.
Loggers only emit through handlers installed by ``configure_logging``; the
library never configures handlers on import.
"""

from __future__ import annotations

import datetime
import enum
import json
import logging
import sys
import uuid
from typing import Any

from imperator.logging.config import LoggingSettings, LogLevel

ROOT_LOGGER_NAME = "imperator"

# Name of the LogRecord attribute carrying structured context
CONTEXT_ATTR = "imperator_context"


class StructuredFormatter(logging.Formatter):
    """Formatter that supports structured logging with context data."""

    def __init__(
        self,
        json_format: bool = False,
        include_timestamp: bool = True,
        include_level: bool = True,
    ) -> None:
        """Initialize a structured formatter.

        Args:
            json_format: Whether to format logs as JSON
            include_timestamp: Whether to include timestamps in logs
            include_level: Whether to include log level in logs
        """
        self.json_format = json_format
        self.include_timestamp = include_timestamp
        self.include_level = include_level

        fmt = "%(name)s %(message)s"
        if include_timestamp:
            fmt = "%(asctime)s " + fmt
        if include_level and not json_format:
            fmt = fmt + " [%(levelname)s]"

        super().__init__(fmt=fmt, datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record with structured data.

        Args:
            record: The log record to format

        Returns:
            Formatted log string
        """
        extra: dict[str, Any] = dict(getattr(record, CONTEXT_ATTR, None) or {})

        if self.json_format:
            return self._format_json(record, extra)
        message = super().format(record)
        return self._format_text(message, extra)

    def _format_json(self, record: logging.LogRecord, extra: dict[str, Any]) -> str:
        log_data: dict[str, Any] = {
            "message": record.getMessage(),
            "name": record.name,
            **extra,
        }

        if self.include_level:
            log_data["level"] = record.levelname

        if self.include_timestamp:
            log_data["timestamp"] = self.formatTime(record, self.datefmt)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
            log_data["error"] = str(record.exc_info[1])

        return json.dumps(log_data, default=_json_default)

    def _format_text(self, message: str, extra: dict[str, Any]) -> str:
        if not extra:
            return message

        ctx_str = " ".join(f"{k}={self._format_value(v)}" for k, v in extra.items())
        return f"{message} {ctx_str}"

    def _format_value(self, value: Any) -> str:
        """Format a value for text output."""
        if isinstance(value, str):
            # Quote strings that contain spaces
            if " " in value:
                return f'"{value}"'
            return value
        if isinstance(value, datetime.datetime | datetime.date):
            return value.isoformat()
        if isinstance(value, uuid.UUID):
            return str(value)
        if isinstance(value, enum.Enum):
            return value.name
        if isinstance(value, BaseException):
            return f"{type(value).__name__}({value})"
        try:
            return json.dumps(value, default=_json_default)
        except (TypeError, ValueError):
            return str(value)


def _json_default(obj: Any) -> Any:
    """Convert special types to JSON-serializable values."""
    if isinstance(obj, datetime.datetime | datetime.date):
        return obj.isoformat()
    if isinstance(obj, uuid.UUID):
        return str(obj)
    if isinstance(obj, enum.Enum):
        return obj.value
    if hasattr(obj, "model_dump"):  # Pydantic v2 models
        return obj.model_dump()
    return str(obj)


class ImperatorLogger:
    """Default logger implementation for Imperator.

    Wraps a standard library logger; keyword arguments passed to the log
    methods become structured context on the emitted record.
    """

    def __init__(self, name: str, bound_context: dict[str, Any] | None = None) -> None:
        self.name = name
        self._logger = logging.getLogger(name)
        self._bound_context: dict[str, Any] = dict(bound_context or {})

    def _log(
        self,
        level: int,
        message: str,
        exc_info: bool | BaseException = False,
        **kwargs: Any,
    ) -> None:
        if not self._logger.isEnabledFor(level):
            return
        context = {**self._bound_context, **kwargs}
        self._logger.log(level, message, exc_info=exc_info, extra={CONTEXT_ATTR: context})

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, **kwargs)

    def error(
        self, message: str, exc_info: bool | BaseException = False, **kwargs: Any
    ) -> None:
        self._log(logging.ERROR, message, exc_info=exc_info, **kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        self._log(logging.CRITICAL, message, **kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, exc_info=True, **kwargs)

    def set_level(self, level: LogLevel | int) -> None:
        """Set the logger's level."""
        self._logger.setLevel(int(level))

    def bind(self, **kwargs: Any) -> ImperatorLogger:
        """Create a new logger with bound context values.

        Args:
            **kwargs: Context values to bind

        Returns:
            New logger instance with bound context
        """
        return ImperatorLogger(self.name, {**self._bound_context, **kwargs})


def get_logger(name: str, level: LogLevel | int | None = None) -> ImperatorLogger:
    """Get a logger for the specified name.

    Args:
        name: Logger name (typically __name__)
        level: Optional log level override

    Returns:
        Logger instance
    """
    logger = ImperatorLogger(name)
    if level is not None:
        logger.set_level(level)
    return logger


def configure_logging(settings: LoggingSettings | None = None) -> logging.Logger:
    """Install handlers on the ``imperator`` root logger.

    Existing handlers installed by a previous call are replaced.

    Args:
        settings: Logging settings (loaded from environment if None)

    Returns:
        The configured root logger
    """
    settings = settings or LoggingSettings.load()
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(int(settings.level))

    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = StructuredFormatter(
        json_format=settings.json_format,
        include_timestamp=settings.include_timestamp,
        include_level=settings.include_level,
    )

    if settings.console_enabled:
        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(formatter)
        root.addHandler(console)

    if settings.file_enabled and settings.file_path is not None:
        file_handler = logging.FileHandler(settings.file_path)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    if not root.handlers:
        root.addHandler(logging.NullHandler())

    return root


# Keep the library silent until an application opts in
logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())
