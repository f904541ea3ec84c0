# SPDX-FileCopyrightText: 2024-present Imperator contributors
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: imperator
"""
The process-wide background processor slot.

Every ``Command.commit`` call forwards to the processor held here. The slot
starts out holding a ``NullBackgroundProcessor``. Swapping it affects all
command types at once and is not synchronized: swap during setup and
teardown, not while other threads are committing.

Example::

    recorder = RecordingBackgroundProcessor()
    with use_background_processor(recorder):
        command.commit()
    assert recorder.committed(command)
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum
from typing import TYPE_CHECKING

from imperator.commands.errors import BackgroundProcessorError
from imperator.commands.implementations import (
    AsyncioBackgroundProcessor,
    InlineBackgroundProcessor,
    NullBackgroundProcessor,
    RecordingBackgroundProcessor,
)
from imperator.commands.protocols import BackgroundProcessorProtocol
from imperator.logging import get_logger

if TYPE_CHECKING:
    from imperator.config.settings import CommandSettings

logger = get_logger(__name__)


class ProcessorKind(str, Enum):
    """Names of the built-in background processors."""

    NULL = "null"
    INLINE = "inline"
    RECORDING = "recording"
    ASYNCIO = "asyncio"


_PROCESSOR_TYPES: dict[ProcessorKind, type[BackgroundProcessorProtocol]] = {
    ProcessorKind.NULL: NullBackgroundProcessor,
    ProcessorKind.INLINE: InlineBackgroundProcessor,
    ProcessorKind.RECORDING: RecordingBackgroundProcessor,
    ProcessorKind.ASYNCIO: AsyncioBackgroundProcessor,
}

_current: BackgroundProcessorProtocol = NullBackgroundProcessor()


def get_background_processor() -> BackgroundProcessorProtocol:
    """Return the processor that ``commit`` currently forwards to."""
    return _current


def set_background_processor(
    processor: BackgroundProcessorProtocol,
) -> BackgroundProcessorProtocol:
    """Install ``processor`` process-wide and return the one it replaced.

    Raises:
        BackgroundProcessorError: If ``processor`` has no ``commit`` method
    """
    global _current

    if not isinstance(processor, BackgroundProcessorProtocol):
        raise BackgroundProcessorError(
            f"{processor!r} does not implement BackgroundProcessorProtocol"
        )

    previous, _current = _current, processor
    logger.debug(
        "Background processor swapped",
        previous=repr(previous),
        current=repr(processor),
    )
    return previous


def reset_background_processor() -> BackgroundProcessorProtocol:
    """Reinstall a fresh null processor and return the one it replaced."""
    return set_background_processor(NullBackgroundProcessor())


@contextmanager
def use_background_processor(
    processor: BackgroundProcessorProtocol,
) -> Iterator[BackgroundProcessorProtocol]:
    """Install ``processor`` for the duration of the block, then restore the previous one."""
    previous = set_background_processor(processor)
    try:
        yield processor
    finally:
        set_background_processor(previous)


def create_background_processor(kind: ProcessorKind | str) -> BackgroundProcessorProtocol:
    """Build a built-in processor by name.

    Raises:
        BackgroundProcessorError: If ``kind`` names no built-in processor
    """
    try:
        processor_kind = ProcessorKind(kind)
    except ValueError as e:
        raise BackgroundProcessorError(
            f"Unknown background processor '{kind}'",
            known=[k.value for k in ProcessorKind],
        ) from e
    return _PROCESSOR_TYPES[processor_kind]()


def configure_background_processor(
    settings: CommandSettings,
) -> BackgroundProcessorProtocol:
    """Install the processor named by ``settings`` and return it."""
    processor = create_background_processor(settings.background_processor)
    set_background_processor(processor)
    logger.info(
        "Background processor configured",
        kind=ProcessorKind(settings.background_processor).value,
    )
    return processor
