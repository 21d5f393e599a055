"""Function/method declaration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from phpreflect.domain.model.enums import Modifier
    from phpreflect.domain.model.location import SourceSpan
    from phpreflect.domain.model.parameter import ParameterDeclaration
    from phpreflect.domain.model.syntax import SyntaxNode
    from phpreflect.domain.model.type_ import TypeDeclaration


@dataclass(frozen=True, slots=True)
class StaticVariable:
    """`static $name = expr;` inside a function body.

    Attributes:
        name: Variable name without `$`
        initializer: Initial value expression, None if absent
    """

    name: str
    initializer: SyntaxNode | None = None


@dataclass(frozen=True, slots=True)
class FunctionDeclaration:
    """Function or method definition.

    Attributes:
        name: Short name as declared
        qualified_name: Namespaced name for functions, Class::method for methods
        namespace: Namespace the declaration lives in
        parameters: Parameters in signature order
        return_type: Declared return type, None if untyped
        static_variables: `static` variables in body order
        span: Source lines
        node: Declaration node
        class_name: Declaring class for methods, None for functions
        modifiers: Modifier bits (methods only, 0 for functions)
        returns_reference: Declared as `function &name()`
        is_generator: Body contains `yield`
        doc_comment: Doc comment text
    """

    name: str
    qualified_name: str
    namespace: str
    parameters: tuple[ParameterDeclaration, ...]
    return_type: TypeDeclaration | None
    static_variables: tuple[StaticVariable, ...]
    span: SourceSpan
    node: SyntaxNode
    class_name: str | None = None
    modifiers: Modifier | int = 0
    returns_reference: bool = False
    is_generator: bool = False
    doc_comment: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("function name must not be empty")

        if not self.qualified_name:
            raise ValueError("qualified_name must not be empty")

        if self.name not in self.qualified_name:
            raise ValueError(
                f"qualified_name '{self.qualified_name}' must contain name '{self.name}'"
            )

        for expected, parameter in enumerate(self.parameters):
            if parameter.position != expected:
                raise ValueError(
                    f"parameter ${parameter.name} has position {parameter.position}, "
                    f"expected {expected}"
                )

        if self.modifiers and self.class_name is None:
            raise ValueError("only methods may carry modifiers")

    @property
    def is_method(self) -> bool:
        """Defined inside a class-like."""
        return self.class_name is not None
