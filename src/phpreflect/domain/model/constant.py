"""Constant declaration (class constant, enum case, namespace constant)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from phpreflect.domain.model.enums import Modifier
    from phpreflect.domain.model.location import SourceSpan
    from phpreflect.domain.model.syntax import SyntaxNode


@dataclass(frozen=True, slots=True)
class ConstantDeclaration:
    """Constant whose value is evaluated on demand.

    Attributes:
        name: Constant name (for `define()` the name string as written)
        owner: Declaring class for class constants, namespace otherwise
        span: Source lines
        value: Value expression; None only for pure enum cases
        modifiers: Visibility/final bits (class constants only)
        is_enum_case: Declared with `case` inside an enum
        is_defined: Registered with `define()` rather than `const`
        doc_comment: Doc comment text
    """

    name: str
    owner: str
    span: SourceSpan
    value: SyntaxNode | None
    modifiers: Modifier | int = 0
    is_enum_case: bool = False
    is_defined: bool = False
    doc_comment: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("constant name must not be empty")

        if self.value is None and not self.is_enum_case:
            raise ValueError(f"constant {self.name} must have a value expression")

        if self.is_enum_case and self.is_defined:
            raise ValueError("enum case cannot be defined with define()")
