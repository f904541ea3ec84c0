# SPDX-FileCopyrightText: 2024-present Imperator contributors
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: imperator
"""
Imperator: command objects with declared attributes, validation, and
pluggable background dispatch.
"""

from imperator.commands import (
    Attribute,
    Command,
    InvalidCommandError,
    NullBackgroundProcessor,
    RecordingBackgroundProcessor,
    UndeclaredAttributeError,
    get_background_processor,
    set_background_processor,
    use_background_processor,
)
from imperator.config import CommandSettings, configure

__version__ = "0.1.0"

__all__ = [
    "Attribute",
    "Command",
    "CommandSettings",
    "InvalidCommandError",
    "NullBackgroundProcessor",
    "RecordingBackgroundProcessor",
    "UndeclaredAttributeError",
    "configure",
    "get_background_processor",
    "set_background_processor",
    "use_background_processor",
]
