"""Configuration exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from phpreflect.domain.exceptions.base import PhpReflectError

if TYPE_CHECKING:
    from pathlib import Path


class LocatorConfigurationError(PhpReflectError):
    """Autoload configuration for a locator is missing or malformed.

    Attributes:
        path: Configuration file that was read
        reason: What is wrong with it
    """

    def __init__(self, path: Path, reason: str) -> None:
        if not reason:
            raise ValueError("reason must be non-empty string")

        self.path = path
        self.reason = reason
        super().__init__(f"Invalid autoload configuration {path}: {reason}")
