# SPDX-FileCopyrightText: 2024-present Imperator contributors
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: imperator
"""
Protocol definitions for the commands package.

This module contains the capability interfaces a command relies on: the
validator that answers "is this command acceptable?" and the background
processor that commands are handed off to by ``commit``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from imperator.commands.base_command import Command


@runtime_checkable
class ValidatorProtocol(Protocol):
    """
    Protocol for command validators.

    Validators read the command's current attribute values and must not
    modify them. Both methods are pure queries: strict operations call
    ``is_valid`` and then, only on failure, ``errors_for``.
    """

    def is_valid(self, command: Command) -> bool: ...

    def errors_for(self, command: Command) -> dict[str, list[str]]: ...


@runtime_checkable
class BackgroundProcessorProtocol(Protocol):
    """
    Protocol for background processors.

    A processor receives the full command instance and the resolved dispatch
    options. It decides whether to run the command now, queue it, or record it.
    """

    def commit(self, command: Command, options: Mapping[str, Any]) -> Any: ...
