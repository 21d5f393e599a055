"""Namespace `use` import."""

from dataclasses import dataclass
from enum import Enum


class ImportKind(Enum):
    """What a `use` statement imports."""

    CLASS = "class"
    FUNCTION = "function"
    CONSTANT = "const"


@dataclass(frozen=True, slots=True)
class UseImport:
    """One imported name.

    Attributes:
        name: Fully qualified imported name, without leading backslash
        alias: Local name (explicit `as` alias, or the last name segment)
        kind: Class, function or constant import
        line: Line of the `use` statement
    """

    name: str
    alias: str
    kind: ImportKind = ImportKind.CLASS
    line: int = 1

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("imported name must not be empty")
        if self.name.startswith("\\"):
            raise ValueError(f"imported name must be fully qualified without '\\': {self.name}")
        if not self.alias:
            raise ValueError("alias must not be empty")
