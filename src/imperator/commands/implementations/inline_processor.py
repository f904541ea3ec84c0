# SPDX-FileCopyrightText: 2024-present Imperator contributors
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: imperator
"""
Inline background processor.

Runs committed commands immediately on the caller's thread. Useful in
development and in tests that want ``commit`` to behave like ``perform``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from imperator.logging import get_logger

if TYPE_CHECKING:
    from imperator.commands.base_command import Command

logger = get_logger(__name__)


class InlineBackgroundProcessor:
    """Processor that performs each committed command synchronously."""

    def commit(self, command: Command, options: Mapping[str, Any]) -> Any:
        logger.debug(
            "Performing committed command inline",
            command_type=type(command).__name__,
            command_id=command.id,
            options=dict(options),
        )
        return command.perform()

    def __repr__(self) -> str:
        return "InlineBackgroundProcessor()"
