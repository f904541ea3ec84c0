# SPDX-FileCopyrightText: 2024-present Imperator contributors
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: imperator
"""
Command base class for Imperator.

A command is a unit of application logic with declared, mass-assignable
attributes and exactly one action. It can be performed in-process or
committed to the process-wide background processor.

Example::

    class CreateUser(Command, background={"queue": "users"}):
        email = Attribute(str, required=True)
        role = Attribute(str, default="member")

        def action(self):
            return users.create(email=self.email, role=self.role)

    CreateUser(email="a@example.com").perform_strict()
    CreateUser({"email": "b@example.com", "admin": True}).commit(priority=5)
"""

from __future__ import annotations

import uuid
from collections.abc import Callable, Mapping
from typing import Any, ClassVar

from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticSerializationError, from_json, to_json

from imperator.commands.errors import (
    ActionNotDefinedError,
    AttributeDeclarationError,
    CommandDeclarationError,
    CommandSerializationError,
    InvalidCommandError,
    UndeclaredAttributeError,
)
from imperator.commands.processors import get_background_processor
from imperator.commands.protocols import ValidatorProtocol
from imperator.commands.schema import MISSING, AttributeSchema
from imperator.commands.validation import (
    PRESENCE_MESSAGE,
    AttributeRuleValidator,
    ValidationRule,
    is_present,
)
from imperator.logging import get_logger

logger = get_logger(__name__)

# Marks an ``action`` function generated from an action callable
ACTION_BLOCK_ATTR = "__action_block__"


class Attribute:
    """Declares a command attribute in a class body.

    Args:
        type_: Declared value type, used by the default validator
        default: Literal default, or a zero-argument callable producing one
        required: Shorthand for a presence validation rule
    """

    def __init__(
        self, type_: Any = Any, *, default: Any = MISSING, required: bool = False
    ) -> None:
        self.type = type_
        self.default = default
        self.required = required
        self.name: str | None = None

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, instance: Command | None, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return instance._values.get(self.name)

    def __set__(self, instance: Command, value: Any) -> None:
        instance._values[self.name] = value

    def __repr__(self) -> str:
        type_name = getattr(self.type, "__name__", repr(self.type))
        return f"Attribute({self.name}: {type_name})"


def _parent_schema(cls: type) -> AttributeSchema | None:
    for base in cls.__mro__[1:]:
        schema = base.__dict__.get("__attribute_schema__")
        if schema is not None:
            return schema
    return None


class Command:
    """
    Base class for commands.

    Subclasses declare attributes with ``Attribute`` (or ``attribute()``),
    provide one action, and optionally default background options. Instances
    accept a mapping of candidate values; keys the type never declared are
    discarded.
    """

    __attribute_schema__: ClassVar[AttributeSchema]
    _own_background_options: ClassVar[dict[str, Any]] = {}
    _own_validation_rules: ClassVar[list[ValidationRule]] = []

    validator: ClassVar[ValidatorProtocol] = AttributeRuleValidator()

    id = Attribute(str, default=lambda: str(uuid.uuid4()))

    _values: dict[str, Any]

    def __init_subclass__(
        cls,
        *,
        action: Callable[[Any], Any] | None = None,
        background: Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init_subclass__(**kwargs)

        schema = AttributeSchema(cls.__name__, _parent_schema(cls))
        cls.__attribute_schema__ = schema
        for name, value in list(cls.__dict__.items()):
            if isinstance(value, Attribute):
                cls._declare(name, value)

        cls._own_background_options = dict(background or {})
        cls._own_validation_rules = []

        if action is not None:
            cls.set_action(action)

    # -- class-definition API -------------------------------------------------

    @classmethod
    def _declare(cls, name: str, descriptor: Attribute) -> None:
        if name in RESERVED_NAMES:
            raise AttributeDeclarationError(
                cls.__name__, name, "name is used by the Command API"
            )
        cls.__attribute_schema__.declare(
            name, descriptor.type, descriptor.default, descriptor.required
        )

    @classmethod
    def attribute(
        cls,
        name: str,
        type_: Any = Any,
        *,
        default: Any = MISSING,
        required: bool = False,
    ) -> Attribute:
        """Declare an attribute on this command type after class creation."""
        if cls is Command:
            raise CommandDeclarationError("Declare attributes on Command subclasses")
        descriptor = Attribute(type_, default=default, required=required)
        cls._declare(name, descriptor)
        descriptor.__set_name__(cls, name)
        setattr(cls, name, descriptor)
        return descriptor

    @classmethod
    def attribute_schema(cls) -> AttributeSchema:
        return cls.__attribute_schema__

    @classmethod
    def set_action(cls, func: Callable[[Any], Any]) -> Callable[[Any], Any]:
        """Use ``func(command)`` as this type's action.

        Also usable as a decorator. A type whose own body defines an
        ``action`` method cannot take an action callable as well.
        """
        if cls is Command:
            raise CommandDeclarationError("Define actions on Command subclasses")
        if not callable(func):
            raise CommandDeclarationError(
                f"Action for {cls.__name__} must be callable", command_type=cls.__name__
            )
        own = cls.__dict__.get("action")
        if own is not None and not hasattr(own, ACTION_BLOCK_ATTR):
            raise CommandDeclarationError(
                f"{cls.__name__} defines an action method and an action callable; "
                "declare exactly one",
                command_type=cls.__name__,
            )

        def action(self: Command) -> Any:
            return func(self)

        setattr(action, ACTION_BLOCK_ATTR, func)
        action.__qualname__ = f"{cls.__qualname__}.action"
        action.__doc__ = getattr(func, "__doc__", None)
        cls.action = action
        return func

    @classmethod
    def background(cls, options: Mapping[str, Any] | None = None, /, **kwargs: Any) -> None:
        """Add default dispatch options for this type and its subclasses."""
        if cls is Command:
            raise CommandDeclarationError("Declare background options on Command subclasses")
        cls._own_background_options = {
            **cls._own_background_options,
            **(options or {}),
            **kwargs,
        }

    @classmethod
    def background_defaults(cls) -> dict[str, Any]:
        """Dispatch options declared on this type, inherited along the MRO."""
        merged: dict[str, Any] = {}
        for klass in reversed(cls.__mro__):
            merged.update(klass.__dict__.get("_own_background_options", {}))
        return merged

    @classmethod
    def validates(
        cls, attribute: str, check: Callable[..., Any], message: str = "is invalid"
    ) -> ValidationRule:
        """Register a rule checked by the default validator."""
        if cls is Command:
            raise CommandDeclarationError("Declare validation rules on Command subclasses")
        if not cls.__attribute_schema__.is_declared(attribute):
            raise AttributeDeclarationError(
                cls.__name__, attribute, "validation rules need a declared attribute"
            )
        rule = ValidationRule(attribute, check, message)
        cls._own_validation_rules.append(rule)
        return rule

    @classmethod
    def validates_presence(cls, *attributes: str) -> None:
        for attribute in attributes:
            cls.validates(attribute, is_present, PRESENCE_MESSAGE)

    @classmethod
    def validation_rules(cls) -> list[ValidationRule]:
        rules: list[ValidationRule] = []
        for klass in reversed(cls.__mro__):
            rules.extend(klass.__dict__.get("_own_validation_rules", []))
        return rules

    @classmethod
    def load(cls, payload: str | bytes | Mapping[str, Any]) -> Command:
        """Rebuild a command from ``dump()`` output or a plain mapping.

        Declared values are converted back to their declared types, so dates,
        UUIDs, tuples and the like survive a round trip through JSON.
        """
        if isinstance(payload, Mapping):
            data = payload
        else:
            try:
                data = from_json(payload)
            except ValueError as e:
                raise CommandSerializationError(cls.__name__, str(e)) from e
            if not isinstance(data, dict):
                raise CommandSerializationError(
                    cls.__name__, f"expected a JSON object, got {type(data).__name__}"
                )

        schema = cls.attribute_schema()
        accepted, _ = schema.filter(data)
        values = {}
        for name, value in accepted.items():
            try:
                values[name] = schema.declaration(name).coerce(value)
            except PydanticValidationError as e:
                raise CommandSerializationError(
                    cls.__name__, f"{name}: {e.errors()[0]['msg']}"
                ) from e
        return cls(data, **values)

    # -- instance API ---------------------------------------------------------

    def __init__(self, attrs: Mapping[str, Any] | None = None, /, **kwargs: Any) -> None:
        candidates = {**(attrs or {}), **kwargs}
        schema = type(self).attribute_schema()
        accepted, dropped = schema.filter(candidates)
        object.__setattr__(self, "_values", schema.build_values(accepted))
        if dropped:
            logger.debug(
                "Discarded undeclared attributes",
                command_type=type(self).__name__,
                discarded=dropped,
            )

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        raise UndeclaredAttributeError(type(self).__name__, name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_") or hasattr(type(self), name):
            object.__setattr__(self, name, value)
            return
        raise UndeclaredAttributeError(type(self).__name__, name)

    @property
    def attributes(self) -> dict[str, Any]:
        """Current values of every declared attribute, unset ones as None."""
        return {
            name: self._values.get(name)
            for name in type(self).attribute_schema().all_names()
        }

    def update(self, attrs: Mapping[str, Any] | None = None, /, **kwargs: Any) -> Command:
        """Mass-assign declared attributes; undeclared keys are discarded."""
        accepted, dropped = type(self).attribute_schema().filter(
            {**(attrs or {}), **kwargs}
        )
        self._values.update(accepted)
        if dropped:
            logger.debug(
                "Discarded undeclared attributes",
                command_type=type(self).__name__,
                discarded=dropped,
            )
        return self

    def dump(self) -> str:
        """Serialize the attribute values as a JSON object."""
        try:
            return to_json(self.attributes).decode()
        except PydanticSerializationError as e:
            raise CommandSerializationError(type(self).__name__, str(e)) from e

    def action(self) -> Any:
        raise ActionNotDefinedError(type(self).__name__)

    def is_valid(self) -> bool:
        return self.validator.is_valid(self)

    def validation_errors(self) -> dict[str, list[str]]:
        return self.validator.errors_for(self)

    def _ensure_valid(self) -> None:
        if self.is_valid():
            return
        errors = self.validation_errors()
        logger.warning(
            "Command failed validation",
            command_type=type(self).__name__,
            command_id=self.id,
            errors=errors,
        )
        raise InvalidCommandError(self, errors)

    def perform(self) -> Any:
        """Run the action now, on the calling thread, regardless of validity."""
        logger.debug(
            "Performing command", command_type=type(self).__name__, command_id=self.id
        )
        return self.action()

    def perform_strict(self) -> Any:
        """Run the action only if the command is valid.

        Raises:
            InvalidCommandError: If the command is not valid; the action does not run
        """
        self._ensure_valid()
        return self.perform()

    def background_options(
        self, options: Mapping[str, Any] | None = None, /, **kwargs: Any
    ) -> dict[str, Any]:
        """Type-level background options overridden by the given ones."""
        return {**type(self).background_defaults(), **(options or {}), **kwargs}

    def commit(self, options: Mapping[str, Any] | None = None, /, **kwargs: Any) -> Any:
        """Hand this command and its resolved options to the background processor."""
        merged = self.background_options(options, **kwargs)
        processor = get_background_processor()
        logger.debug(
            "Committing command",
            command_type=type(self).__name__,
            command_id=self.id,
            processor=type(processor).__name__,
            options=merged,
        )
        return processor.commit(self, merged)

    def commit_strict(
        self, options: Mapping[str, Any] | None = None, /, **kwargs: Any
    ) -> Any:
        """Commit only if the command is valid.

        Raises:
            InvalidCommandError: If the command is not valid; nothing is forwarded
        """
        self._ensure_valid()
        return self.commit(options, **kwargs)

    def __repr__(self) -> str:
        values = ", ".join(f"{k}={v!r}" for k, v in self.attributes.items())
        return f"{type(self).__name__}({values})"


Command.__attribute_schema__ = AttributeSchema("Command")
Command.__attribute_schema__.declare("id", str, Command.id.default)

RESERVED_NAMES: frozenset[str] = frozenset(
    name for name in vars(Command) if not name.startswith("_") and name != "id"
)
