"""Class-like declaration (class, interface, trait, enum)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from phpreflect.domain.model.enums import ClassKind

if TYPE_CHECKING:
    from phpreflect.domain.model.constant import ConstantDeclaration
    from phpreflect.domain.model.function import FunctionDeclaration
    from phpreflect.domain.model.location import SourceSpan
    from phpreflect.domain.model.property_ import PropertyDeclaration
    from phpreflect.domain.model.syntax import SyntaxNode
    from phpreflect.domain.model.type_ import TypeDeclaration


@dataclass(frozen=True, slots=True)
class TraitAlias:
    """`Trait::method as alias` adaptation inside a trait `use` block.

    Attributes:
        alias: New method name, None when only visibility changes
        method: Aliased method name
        trait_name: Fully qualified trait, None when the method is unqualified
    """

    alias: str | None
    method: str
    trait_name: str | None = None


@dataclass(frozen=True, slots=True)
class ClassDeclaration:
    """PHP class-like definition.

    Attributes:
        name: Fully qualified name (Namespace\\Class)
        short_name: Name as declared
        namespace: Declaring namespace, "" for global
        kind: CLASS/INTERFACE/TRAIT/ENUM
        span: Source lines
        node: Declaration node
        parent_name: Fully qualified parent class, None if none
        interface_names: Implemented (or, for interfaces, extended) interfaces
        trait_names: Used traits in declaration order
        trait_aliases: Method aliases from trait `use` blocks
        methods: Declared methods
        properties: Declared and promoted properties
        constants: Declared constants and enum cases
        is_abstract: Declared with `abstract`
        is_final: Declared with `final`
        is_readonly: Declared with `readonly`
        enum_backing_type: Backing type of a backed enum
        doc_comment: Doc comment text
    """

    name: str
    short_name: str
    namespace: str
    kind: ClassKind
    span: SourceSpan
    node: SyntaxNode
    parent_name: str | None = None
    interface_names: tuple[str, ...] = ()
    trait_names: tuple[str, ...] = ()
    trait_aliases: tuple[TraitAlias, ...] = ()
    methods: tuple[FunctionDeclaration, ...] = ()
    properties: tuple[PropertyDeclaration, ...] = ()
    constants: tuple[ConstantDeclaration, ...] = ()
    is_abstract: bool = False
    is_final: bool = False
    is_readonly: bool = False
    enum_backing_type: TypeDeclaration | None = None
    doc_comment: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.short_name:
            raise ValueError("class name must not be empty")

        if not self.name.endswith(self.short_name):
            raise ValueError(f"name '{self.name}' must end with short name '{self.short_name}'")

        if self.is_abstract and self.is_final:
            raise ValueError(f"class {self.name} cannot be both abstract and final")

        if self.parent_name is not None and self.kind is not ClassKind.CLASS:
            raise ValueError(f"only classes may extend a parent class, {self.name} is {self.kind}")

        if self.enum_backing_type is not None and self.kind is not ClassKind.ENUM:
            raise ValueError("only enums may declare a backing type")

        for method in self.methods:
            if not method.is_method:
                raise ValueError(f"method '{method.name}' must belong to a class")
