"""Class locator port (interface)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class LocatorPort(ABC):
    """Maps a class name to the file declaring it.

    Implementations must not load or execute the file. The engine only
    feeds the returned path back into the parser.
    """

    @abstractmethod
    def locate_class(self, class_name: str) -> Path | None:
        """Find the file declaring a class.

        Args:
            class_name: Fully qualified class name without leading backslash

        Returns:
            Path to the file, or None if the class is unknown
        """
        ...
