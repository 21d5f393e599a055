"""PHP values produced by static evaluation.

Scalars map onto Python builtins (int, float, str, bool, None). PHP arrays
are ordered dicts whose keys are int or str. Enum cases have no Python
counterpart, so they get a small value object.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True, slots=True)
class EnumCase:
    """Reference to a PHP enum case (`Suit::Hearts`).

    Attributes:
        class_name: Fully qualified enum name
        case_name: Case name as declared
    """

    class_name: str
    case_name: str

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.class_name:
            raise ValueError("class_name must not be empty")
        if not self.case_name:
            raise ValueError("case_name must not be empty")

    def __str__(self) -> str:
        """Format as Enum::Case."""
        return f"{self.class_name}::{self.case_name}"


PhpValue: TypeAlias = "int | float | str | bool | None | dict[int | str, PhpValue] | EnumCase"
