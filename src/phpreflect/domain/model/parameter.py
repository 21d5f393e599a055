"""Function parameter declaration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from phpreflect.domain.model.enums import Modifier
    from phpreflect.domain.model.syntax import SyntaxNode
    from phpreflect.domain.model.type_ import TypeDeclaration


@dataclass(frozen=True, slots=True)
class ParameterDeclaration:
    """Function/method parameter.

    Attributes:
        name: Parameter name without `$`
        position: Zero-based position in the signature
        type: Declared type, None if untyped
        default: Default value expression, unresolved; None if required
        is_by_reference: Declared with `&`
        is_variadic: Declared with `...`
        promoted_modifiers: Visibility/readonly bits of a promoted constructor
            parameter, None for ordinary parameters
        doc_comment: Doc comment attached to the parameter
    """

    name: str
    position: int
    type: TypeDeclaration | None = None
    default: SyntaxNode | None = None
    is_by_reference: bool = False
    is_variadic: bool = False
    promoted_modifiers: Modifier | None = None
    doc_comment: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("parameter name must not be empty")

        if self.position < 0:
            raise ValueError(f"position must be >= 0, got {self.position}")

        if self.is_variadic and self.default is not None:
            raise ValueError("variadic parameter cannot have a default value")

    @property
    def is_promoted(self) -> bool:
        """Constructor property promotion."""
        return self.promoted_modifiers is not None
