"""Top-level pytest configuration for imperator."""

import pytest

# Import modules for their side effects to ensure the error registry is populated
import imperator.errors.base
import imperator.commands.errors

from imperator.commands import (
    NullBackgroundProcessor,
    RecordingBackgroundProcessor,
    set_background_processor,
)


@pytest.fixture(autouse=True)
def restore_background_processor():
    """Every test starts and ends with the null processor installed."""
    previous = set_background_processor(NullBackgroundProcessor())
    yield
    set_background_processor(previous)


@pytest.fixture
def recorder():
    """Install a recording processor for the duration of a test."""
    processor = RecordingBackgroundProcessor()
    set_background_processor(processor)
    return processor
