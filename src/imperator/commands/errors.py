# SPDX-FileCopyrightText: 2024-present Imperator contributors
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: imperator
"""
Command-specific errors for Imperator.

Only ``InvalidCommandError`` is raised by the command lifecycle itself;
errors raised by an action or a background processor propagate unchanged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final

from imperator.errors.base import ErrorCategory, ErrorCode, ErrorSeverity, ImperatorError

if TYPE_CHECKING:
    from imperator.commands.base_command import Command

COMMAND: Final = ErrorCategory.get_or_create("COMMAND")

UNDECLARED_ATTRIBUTE: Final = ErrorCode.get_or_create("UNDECLARED_ATTRIBUTE", COMMAND)
INVALID_COMMAND: Final = ErrorCode.get_or_create("INVALID_COMMAND", COMMAND)
ACTION_NOT_DEFINED: Final = ErrorCode.get_or_create("ACTION_NOT_DEFINED", COMMAND)
COMMAND_DECLARATION_ERROR: Final = ErrorCode.get_or_create(
    "COMMAND_DECLARATION_ERROR", COMMAND
)
COMMAND_SERIALIZATION_ERROR: Final = ErrorCode.get_or_create(
    "COMMAND_SERIALIZATION_ERROR", COMMAND
)
BACKGROUND_PROCESSOR_ERROR: Final = ErrorCode.get_or_create(
    "BACKGROUND_PROCESSOR_ERROR", COMMAND
)


class CommandError(ImperatorError):
    """Base class for command-related errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = COMMAND_DECLARATION_ERROR,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, code=code, severity=severity, **kwargs)


class UndeclaredAttributeError(CommandError, AttributeError):
    """Raised when code reads or writes an attribute the command type never declared."""

    def __init__(self, command_type: str, attribute: str, **kwargs: Any) -> None:
        super().__init__(
            f"{command_type} has no declared attribute '{attribute}'",
            code=UNDECLARED_ATTRIBUTE,
            command_type=command_type,
            attribute=attribute,
            **kwargs,
        )
        self.command_type = command_type
        self.attribute = attribute


class InvalidCommandError(CommandError):
    """Raised by the strict lifecycle operations when a command is not valid.

    The offending command is available as ``command`` and the validator's
    findings as ``errors``.
    """

    def __init__(
        self,
        command: Command,
        errors: dict[str, list[str]] | None = None,
        **kwargs: Any,
    ) -> None:
        self.command = command
        self.errors = dict(errors or {})
        command_type = type(command).__name__
        detail = "; ".join(
            f"{name}: {', '.join(messages)}" for name, messages in self.errors.items()
        )
        message = f"{command_type} is invalid"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(
            message,
            code=INVALID_COMMAND,
            severity=ErrorSeverity.WARNING,
            command_type=command_type,
            errors=self.errors,
            **kwargs,
        )


class ActionNotDefinedError(CommandError):
    """Raised when a command type without an action is performed."""

    def __init__(self, command_type: str, **kwargs: Any) -> None:
        super().__init__(
            f"{command_type} does not define an action",
            code=ACTION_NOT_DEFINED,
            command_type=command_type,
            **kwargs,
        )


class CommandDeclarationError(CommandError):
    """Raised when a command type is declared inconsistently."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message, code=COMMAND_DECLARATION_ERROR, **kwargs)


class AttributeDeclarationError(CommandDeclarationError):
    """Raised when an attribute declaration is not usable."""

    def __init__(
        self, command_type: str, attribute: str, reason: str, **kwargs: Any
    ) -> None:
        super().__init__(
            f"Cannot declare attribute '{attribute}' on {command_type}: {reason}",
            command_type=command_type,
            attribute=attribute,
            **kwargs,
        )


class CommandSerializationError(CommandError):
    """Raised when a command cannot be dumped or loaded."""

    def __init__(self, command_type: str, reason: str, **kwargs: Any) -> None:
        super().__init__(
            f"Cannot serialize {command_type}: {reason}",
            code=COMMAND_SERIALIZATION_ERROR,
            command_type=command_type,
            **kwargs,
        )


class BackgroundProcessorError(CommandError):
    """Raised when a background processor cannot be configured or used."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message, code=BACKGROUND_PROCESSOR_ERROR, **kwargs)
