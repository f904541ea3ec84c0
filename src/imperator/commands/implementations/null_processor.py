# SPDX-FileCopyrightText: 2024-present Imperator contributors
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: imperator
"""
Null background processor.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from imperator.commands.base_command import Command


class NullBackgroundProcessor:
    """Processor installed at start-up: accepts commits, runs and records nothing."""

    def commit(self, command: Command, options: Mapping[str, Any]) -> None:
        return None

    def __repr__(self) -> str:
        return "NullBackgroundProcessor()"
