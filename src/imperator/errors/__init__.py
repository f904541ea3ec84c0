# SPDX-FileCopyrightText: 2024-present Imperator contributors
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: imperator

"""
Error handling for Imperator.
"""

from __future__ import annotations

from imperator.errors.base import (
    INTERNAL,
    INTERNAL_ERROR,
    ErrorCategory,
    ErrorCode,
    ErrorSeverity,
    ImperatorError,
)
from imperator.errors.registry import ErrorRegistry, registry

__all__ = [
    # Error categories
    "ErrorCode",
    "ErrorCategory",
    "ErrorSeverity",
    "INTERNAL",
    "INTERNAL_ERROR",
    # Base errors
    "ImperatorError",
    # Registry
    "ErrorRegistry",
    "registry",
]
