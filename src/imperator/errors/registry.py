"""Unified error registry implementation for Imperator."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from imperator.errors.base import ErrorCategory, ErrorCode


class ErrorRegistry:
    """Singleton registry for all error codes and categories."""

    _instance: ErrorRegistry | None = None
    _lock = threading.RLock()

    def __new__(cls) -> ErrorRegistry:
        with cls._lock:
            if cls._instance is None:
                instance = super().__new__(cls)
                instance._categories = {}
                instance._codes = {}
                cls._instance = instance
            return cls._instance

    def __init__(self) -> None:
        """Initialize registry attributes if not already present."""
        if not hasattr(self, "_categories"):
            self._categories: dict[str, ErrorCategory] = {}
        if not hasattr(self, "_codes"):
            self._codes: dict[str, ErrorCode] = {}

    def get_category(
        self, name: str, parent: ErrorCategory | None = None
    ) -> ErrorCategory:
        """Get or create a category.

        Args:
            name: The category name
            parent: Optional parent category

        Returns:
            The ErrorCategory
        """
        with self._lock:
            if name in self._categories:
                return self._categories[name]

            from imperator.errors.base import ErrorCategory

            category = ErrorCategory(name, parent)
            self._categories[name] = category
            return category

    def get_code(self, code: str, category_name: str = "INTERNAL") -> ErrorCode:
        """Get or create an error code.

        Args:
            code: The error code
            category_name: The category name (defaults to INTERNAL)

        Returns:
            The ErrorCode
        """
        with self._lock:
            key = f"{category_name}.{code}"
            if key in self._codes:
                return self._codes[key]

            from imperator.errors.base import ErrorCode

            error_code = ErrorCode(code, self.get_category(category_name))
            self._codes[key] = error_code
            return error_code

    def lookup_code(self, code: str) -> ErrorCode | None:
        """Look up an error code without creating it if missing."""
        for key, error_code in self._codes.items():
            if key.endswith(f".{code}"):
                return error_code

        logging.getLogger(__name__).warning(
            "Error code '%s' not found in registry", code
        )
        return None

    def get_all_categories(self) -> list[ErrorCategory]:
        return list(self._categories.values())

    def get_all_codes(self) -> list[ErrorCode]:
        return list(self._codes.values())


# Create a single instance for use throughout the package
registry = ErrorRegistry()
