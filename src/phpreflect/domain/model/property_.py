"""Class property declaration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from phpreflect.domain.model.enums import Modifier
    from phpreflect.domain.model.location import SourceSpan
    from phpreflect.domain.model.syntax import SyntaxNode
    from phpreflect.domain.model.type_ import TypeDeclaration


@dataclass(frozen=True, slots=True)
class PropertyDeclaration:
    """Declared or promoted property.

    Attributes:
        name: Property name without `$`
        class_name: Declaring class
        modifiers: Visibility/static/readonly bits
        span: Source lines
        type: Declared type, None if untyped
        default: Default value expression, None if absent
        is_promoted: Declared through a constructor parameter
        doc_comment: Doc comment text
    """

    name: str
    class_name: str
    modifiers: Modifier
    span: SourceSpan
    type: TypeDeclaration | None = None
    default: SyntaxNode | None = None
    is_promoted: bool = False
    doc_comment: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("property name must not be empty")

        if self.is_promoted and self.default is not None:
            raise ValueError("promoted property cannot declare a default value")
