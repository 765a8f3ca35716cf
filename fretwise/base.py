"""Shared exceptions for fretwise."""

from __future__ import annotations

from typing import Any


class MatchException(Exception):
    """Exception raised when a closed variant dispatch meets an unknown value."""

    def __init__(self, value: Any) -> None:
        """Initialize a MatchException with the unmatched value.

        Args:
            value: The value that failed to match any case.
        """
        super().__init__(f"Failed to match value: {value}")
