# SPDX-FileCopyrightText: 2024-present Imperator contributors
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: imperator
"""Configuration management for Imperator.

Nothing is configured on import: the process starts with the null
background processor and silent loggers until ``configure`` is called.
"""

from __future__ import annotations

from imperator.commands.processors import configure_background_processor
from imperator.commands.protocols import BackgroundProcessorProtocol
from imperator.config.settings import CommandSettings
from imperator.logging import LoggingSettings, configure_logging


def configure(
    settings: CommandSettings | None = None,
    logging_settings: LoggingSettings | None = None,
) -> BackgroundProcessorProtocol:
    """Apply logging settings and install the configured background processor.

    Args:
        settings: Command settings (loaded from environment if None)
        logging_settings: Logging settings (loaded from environment if None)

    Returns:
        The installed background processor
    """
    configure_logging(logging_settings or LoggingSettings.load())
    return configure_background_processor(settings or CommandSettings.load())


__all__ = [
    "CommandSettings",
    "configure",
]
