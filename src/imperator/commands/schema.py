# SPDX-FileCopyrightText: 2024-present Imperator contributors
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: imperator
"""
Attribute schemas for command types.

Each command type owns an ``AttributeSchema`` listing the attribute names it
accepts, their declared types, and their defaults. A subclass schema links to
its parent's schema and sees the parent's declarations followed by its own.
"""

from __future__ import annotations

import copy
import keyword
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from functools import cached_property
from typing import Any, Final

from pydantic import InstanceOf, PydanticSchemaGenerationError, TypeAdapter


class _Missing:
    """Sentinel type for "no default declared"."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing()


@dataclass(frozen=True)
class AttributeDeclaration:
    """A single declared attribute.

    ``default`` is either a literal value or a zero-argument callable that
    produces one; it is resolved each time a command is constructed.
    """

    name: str
    type: Any = Any
    default: Any = MISSING
    required: bool = False

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING

    def resolve_default(self) -> Any:
        if not self.has_default:
            return None
        if callable(self.default):
            return self.default()
        return copy.deepcopy(self.default)

    @cached_property
    def adapter(self) -> TypeAdapter[Any]:
        """Pydantic adapter for the declared type, built on first use.

        Plain classes pydantic has no schema for are checked with isinstance.
        """
        try:
            return TypeAdapter(self.type)
        except PydanticSchemaGenerationError:
            return TypeAdapter(InstanceOf[self.type])

    def coerce(self, value: Any) -> Any:
        """Convert a loosely typed value, such as decoded JSON, to the declared type.

        Raises:
            pydantic.ValidationError: If the value cannot be converted
        """
        if value is None or self.type is Any:
            return value
        return self.adapter.validate_python(value)


class AttributeSchema:
    """Ordered registry of the attributes a command type declares."""

    def __init__(
        self, owner: str = "Command", parent: AttributeSchema | None = None
    ) -> None:
        self.owner = owner
        self.parent = parent
        self._own: dict[str, AttributeDeclaration] = {}

    def declare(
        self,
        name: str,
        type_: Any = Any,
        default: Any = MISSING,
        required: bool = False,
    ) -> AttributeDeclaration:
        """Register an attribute, replacing any earlier declaration on this type."""
        from imperator.commands.errors import AttributeDeclarationError

        if not isinstance(name, str) or not name.isidentifier():
            raise AttributeDeclarationError(self.owner, str(name), "not an identifier")
        if keyword.iskeyword(name):
            raise AttributeDeclarationError(self.owner, name, "reserved keyword")
        if name.startswith("_"):
            raise AttributeDeclarationError(
                self.owner, name, "names starting with '_' are reserved"
            )

        declaration = AttributeDeclaration(
            name=name, type=type_, default=default, required=required
        )
        self._own[name] = declaration
        return declaration

    @property
    def declarations(self) -> Mapping[str, AttributeDeclaration]:
        merged: dict[str, AttributeDeclaration] = (
            dict(self.parent.declarations) if self.parent is not None else {}
        )
        merged.update(self._own)
        return merged

    @property
    def own_declarations(self) -> Mapping[str, AttributeDeclaration]:
        return dict(self._own)

    def declaration(self, name: str) -> AttributeDeclaration | None:
        if name in self._own:
            return self._own[name]
        if self.parent is not None:
            return self.parent.declaration(name)
        return None

    def default_for(self, name: str) -> Any:
        """Resolve the default for ``name``; ``None`` when none was declared."""
        declaration = self.declaration(name)
        if declaration is None:
            return None
        return declaration.resolve_default()

    def is_declared(self, name: str) -> bool:
        return self.declaration(name) is not None

    def all_names(self) -> tuple[str, ...]:
        return tuple(self.declarations)

    def filter(self, candidates: Mapping[str, Any]) -> tuple[dict[str, Any], list[str]]:
        """Split candidates into declared values and discarded keys."""
        names = self.declarations
        accepted = {key: value for key, value in candidates.items() if key in names}
        dropped = [str(key) for key in candidates if key not in names]
        return accepted, dropped

    def build_values(self, candidates: Mapping[str, Any]) -> dict[str, Any]:
        """Produce the initial value map for a new instance."""
        values: dict[str, Any] = {}
        for name, declaration in self.declarations.items():
            if name in candidates:
                values[name] = candidates[name]
            elif declaration.has_default:
                values[name] = declaration.resolve_default()
        return values

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.is_declared(name)

    def __iter__(self) -> Iterator[str]:
        return iter(self.all_names())

    def __len__(self) -> int:
        return len(self.declarations)

    def __repr__(self) -> str:
        return f"AttributeSchema({self.owner}: {', '.join(self.all_names())})"

