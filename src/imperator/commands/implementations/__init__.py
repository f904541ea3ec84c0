# SPDX-FileCopyrightText: 2024-present Imperator contributors
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: imperator
"""
Built-in background processor implementations.
"""

from imperator.commands.implementations.asyncio_processor import (
    AsyncioBackgroundProcessor,
)
from imperator.commands.implementations.inline_processor import (
    InlineBackgroundProcessor,
)
from imperator.commands.implementations.null_processor import NullBackgroundProcessor
from imperator.commands.implementations.recording_processor import (
    RecordingBackgroundProcessor,
)

__all__ = [
    "AsyncioBackgroundProcessor",
    "InlineBackgroundProcessor",
    "NullBackgroundProcessor",
    "RecordingBackgroundProcessor",
]
