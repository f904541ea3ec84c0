# SPDX-FileCopyrightText: 2024-present Imperator contributors
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: imperator
"""
Validators for commands.

``AttributeRuleValidator`` is the default validator: it evaluates the
presence and custom rules registered on the command type. A declared type is
only a tag unless the validator is built with ``check_types=True``, which also
checks every set attribute against its type using pydantic in strict mode.
Rules for an attribute that already failed its presence or type check are
skipped.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError as PydanticValidationError

if TYPE_CHECKING:
    from imperator.commands.base_command import Command

PRESENCE_MESSAGE = "can't be blank"


def is_present(value: Any) -> bool:
    """True unless the value is None, a blank string, or an empty collection."""
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, list | tuple | set | frozenset | dict):
        return bool(value)
    return True


def _accepts_command(check: Callable[..., Any]) -> bool:
    try:
        parameters = list(inspect.signature(check).parameters.values())
    except (TypeError, ValueError):
        return False
    if any(p.kind is inspect.Parameter.VAR_POSITIONAL for p in parameters):
        return True
    positional = [
        p
        for p in parameters
        if p.kind
        in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    ]
    return len(positional) >= 2


@dataclass(frozen=True)
class ValidationRule:
    """A named check on one attribute.

    ``check`` receives the attribute value, and also the command when it
    accepts a second positional argument.
    """

    attribute: str
    check: Callable[..., Any]
    message: str = "is invalid"

    def passes(self, value: Any, command: Command) -> bool:
        if _accepts_command(self.check):
            return bool(self.check(value, command))
        return bool(self.check(value))


class AlwaysValidValidator:
    """Validator that accepts every command."""

    def is_valid(self, command: Command) -> bool:
        return True

    def errors_for(self, command: Command) -> dict[str, list[str]]:
        return {}


class AttributeRuleValidator:
    """Validator driven by the rules declared on the command type."""

    def __init__(self, check_types: bool = False) -> None:
        self.check_types = check_types

    def is_valid(self, command: Command) -> bool:
        return not self.errors_for(command)

    def errors_for(self, command: Command) -> dict[str, list[str]]:
        command_type = type(command)
        values = command.attributes
        errors: dict[str, list[str]] = {}

        for name, declaration in command_type.attribute_schema().declarations.items():
            value = values.get(name)
            if declaration.required and not is_present(value):
                errors.setdefault(name, []).append(PRESENCE_MESSAGE)
                continue
            if not self.check_types or value is None or declaration.type is Any:
                continue
            try:
                declaration.adapter.validate_python(value, strict=True)
            except PydanticValidationError as exc:
                for detail in exc.errors():
                    errors.setdefault(name, []).append(detail["msg"])

        # Rules only see values that already passed the presence and type checks
        failed = set(errors)
        for rule in command_type.validation_rules():
            if rule.attribute in failed:
                continue
            if not rule.passes(values.get(rule.attribute), command):
                messages = errors.setdefault(rule.attribute, [])
                if rule.message not in messages:
                    messages.append(rule.message)

        return errors
