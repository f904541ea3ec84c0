# SPDX-FileCopyrightText: 2024-present Imperator contributors
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: imperator
"""
Recording background processor for tests.

Commits are captured instead of executed, so a test can assert on which
commands were committed and with which options, then optionally run them.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from imperator.logging import get_logger

if TYPE_CHECKING:
    from imperator.commands.base_command import Command

logger = get_logger(__name__)


class RecordingBackgroundProcessor:
    """Test double that records every commit."""

    def __init__(self) -> None:
        self.calls: list[tuple[Command, dict[str, Any]]] = []

    @property
    def commits(self) -> list[Command]:
        """Committed commands, one entry per ``commit`` call."""
        return [command for command, _ in self.calls]

    def commit(self, command: Command, options: Mapping[str, Any]) -> None:
        self.calls.append((command, dict(options)))
        logger.debug(
            "Recorded command commit",
            command_type=type(command).__name__,
            command_id=command.id,
        )

    def committed(self, command: Command) -> bool:
        """Whether this exact instance was committed."""
        return any(recorded is command for recorded, _ in self.calls)

    def commit_count(self, command: Command) -> int:
        return sum(1 for recorded, _ in self.calls if recorded is command)

    def options_for(self, command: Command) -> list[dict[str, Any]]:
        """Options of every commit of this exact instance, in order."""
        return [options for recorded, options in self.calls if recorded is command]

    def perform_all(self) -> list[Any]:
        """Perform recorded commands in commit order and forget them."""
        pending, self.calls = self.calls, []
        return [command.perform() for command, _ in pending]

    def clear(self) -> None:
        self.calls.clear()

    def __len__(self) -> int:
        return len(self.calls)

    def __repr__(self) -> str:
        return f"RecordingBackgroundProcessor(commits={len(self.calls)})"
