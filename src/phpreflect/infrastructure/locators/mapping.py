"""Fixed class → file locator."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from phpreflect.domain.ports.locator import LocatorPort

if TYPE_CHECKING:
    from collections.abc import Mapping


class MappingLocator(LocatorPort):
    """Locator backed by an explicit class name → path mapping.

    Class names are matched case-insensitively and without a leading
    backslash.
    """

    def __init__(self, mapping: Mapping[str, Path | str]) -> None:
        """Initialize locator.

        Args:
            mapping: Fully qualified class name → file path

        Raises:
            TypeError: If mapping is None
        """
        if mapping is None:
            raise TypeError("mapping must not be None")

        self._paths = {
            name.lstrip("\\").lower(): Path(path) for name, path in mapping.items()
        }

    def locate_class(self, class_name: str) -> Path | None:
        """Look the class up in the mapping."""
        return self._paths.get(class_name.lstrip("\\").lower())
