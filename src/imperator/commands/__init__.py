# SPDX-FileCopyrightText: 2024-present Imperator contributors
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: imperator
"""
Commands for Imperator.

This package contains the command base class, its attribute schema, the
validator capability, and the background processor capability that
``commit`` dispatches to.
"""

from .base_command import Attribute, Command
from .errors import (
    ActionNotDefinedError,
    AttributeDeclarationError,
    BackgroundProcessorError,
    CommandDeclarationError,
    CommandError,
    CommandSerializationError,
    InvalidCommandError,
    UndeclaredAttributeError,
)
from .implementations import (
    AsyncioBackgroundProcessor,
    InlineBackgroundProcessor,
    NullBackgroundProcessor,
    RecordingBackgroundProcessor,
)
from .processors import (
    ProcessorKind,
    configure_background_processor,
    create_background_processor,
    get_background_processor,
    reset_background_processor,
    set_background_processor,
    use_background_processor,
)
from .protocols import BackgroundProcessorProtocol, ValidatorProtocol
from .schema import MISSING, AttributeDeclaration, AttributeSchema
from .validation import AlwaysValidValidator, AttributeRuleValidator, ValidationRule

__all__ = [
    # Base types
    "Attribute",
    "Command",
    "AttributeDeclaration",
    "AttributeSchema",
    "MISSING",
    # Protocols
    "BackgroundProcessorProtocol",
    "ValidatorProtocol",
    # Validators
    "AlwaysValidValidator",
    "AttributeRuleValidator",
    "ValidationRule",
    # Background processors
    "AsyncioBackgroundProcessor",
    "InlineBackgroundProcessor",
    "NullBackgroundProcessor",
    "RecordingBackgroundProcessor",
    "ProcessorKind",
    "configure_background_processor",
    "create_background_processor",
    "get_background_processor",
    "reset_background_processor",
    "set_background_processor",
    "use_background_processor",
    # Errors
    "ActionNotDefinedError",
    "AttributeDeclarationError",
    "BackgroundProcessorError",
    "CommandDeclarationError",
    "CommandError",
    "CommandSerializationError",
    "InvalidCommandError",
    "UndeclaredAttributeError",
]
