# SPDX-FileCopyrightText: 2024-present Imperator contributors
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: imperator
"""
Settings for the command layer.

Loaded from environment variables prefixed with ``IMPERATOR_``, e.g.
``IMPERATOR_BACKGROUND_PROCESSOR=inline``.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from imperator.commands.processors import ProcessorKind


class CommandSettings(BaseSettings):
    """Configuration for command dispatch."""

    model_config = SettingsConfigDict(
        env_prefix="IMPERATOR_",
        extra="ignore",
        case_sensitive=False,
    )

    background_processor: ProcessorKind = Field(
        default=ProcessorKind.NULL,
        description="Built-in background processor installed by configure()",
    )

    @classmethod
    def load(cls) -> CommandSettings:
        """Load settings from environment variables or defaults."""
        return cls()
