# SPDX-FileCopyrightText: 2024-present Imperator contributors
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: imperator
"""
Asyncio background processor.

Hands committed commands to the running event loop's executor so that the
action runs off the caller's thread. ``commit`` returns as soon as the work is
scheduled; no ordering is guaranteed between commits.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from concurrent.futures import Executor
from functools import partial
from typing import TYPE_CHECKING, Any

from imperator.commands.errors import BackgroundProcessorError
from imperator.logging import get_logger

if TYPE_CHECKING:
    from imperator.commands.base_command import Command

logger = get_logger(__name__)


def _log_failure(command_type: str, command_id: str, future: asyncio.Future[Any]) -> None:
    # Retrieving the exception also keeps asyncio from reporting it as unhandled
    if future.cancelled() or future.exception() is None:
        return
    logger.error(
        "Background command failed",
        exc_info=future.exception(),
        command_type=command_type,
        command_id=command_id,
    )


class AsyncioBackgroundProcessor:
    """Processor that performs commands in an executor of the running loop."""

    def __init__(self, executor: Executor | None = None) -> None:
        """
        Args:
            executor: Executor to run actions in; the loop's default when None
        """
        self.executor = executor
        self._pending: set[asyncio.Future[Any]] = set()

    @property
    def pending(self) -> int:
        return len(self._pending)

    def commit(self, command: Command, options: Mapping[str, Any]) -> asyncio.Future[Any]:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as e:
            raise BackgroundProcessorError(
                "AsyncioBackgroundProcessor requires a running event loop",
                command_type=type(command).__name__,
            ) from e

        future = loop.run_in_executor(self.executor, command.perform)
        self._pending.add(future)
        future.add_done_callback(self._pending.discard)
        future.add_done_callback(partial(_log_failure, type(command).__name__, command.id))

        logger.debug(
            "Scheduled command in executor",
            command_type=type(command).__name__,
            command_id=command.id,
            options=dict(options),
        )
        return future

    async def drain(self) -> list[Any]:
        """Wait for every scheduled command; the first failure is re-raised."""
        pending = list(self._pending)
        if not pending:
            return []
        return list(await asyncio.gather(*pending))

    def __repr__(self) -> str:
        return f"AsyncioBackgroundProcessor(pending={self.pending})"
