# SPDX-FileCopyrightText: 2024-present Imperator contributors
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: imperator

"""
Public API for the Imperator logging system.
"""

from __future__ import annotations

from imperator.logging.config import LoggingSettings, LogLevel
from imperator.logging.logger import (
    CONTEXT_ATTR,
    ImperatorLogger,
    StructuredFormatter,
    configure_logging,
    get_logger,
)
from imperator.logging.protocols import LoggerProtocol

__all__ = [
    # Core interfaces
    "LoggerProtocol",
    "LogLevel",
    # Implementation
    "ImperatorLogger",
    "StructuredFormatter",
    "CONTEXT_ATTR",
    # Settings
    "LoggingSettings",
    # Factory functions
    "get_logger",
    "configure_logging",
]
