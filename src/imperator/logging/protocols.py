# SPDX-FileCopyrightText: 2024-present Imperator contributors
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: imperator

"""
Logging interface definitions for Imperator.
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """
    Protocol defining the interface for loggers used by Imperator.

    Keyword arguments are structured context attached to the record.
    This protocol is NOT runtime_checkable and should be used
    for static type checking only.
    """

    def debug(self, message: str, **kwargs: Any) -> None: ...

    def info(self, message: str, **kwargs: Any) -> None: ...

    def warning(self, message: str, **kwargs: Any) -> None: ...

    def error(
        self, message: str, exc_info: bool | BaseException = False, **kwargs: Any
    ) -> None: ...

    def critical(self, message: str, **kwargs: Any) -> None: ...

    def exception(self, message: str, **kwargs: Any) -> None: ...

    def bind(self, **kwargs: Any) -> LoggerProtocol: ...
