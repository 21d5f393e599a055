"""Lexical scope of an expression and the constant lookup contract."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Protocol

from phpreflect.domain.model.enums import ClassKind

if TYPE_CHECKING:
    from pathlib import Path

    from phpreflect.domain.model.symbol_table import SymbolTable
    from phpreflect.domain.model.values import PhpValue


class ConstantProvider(Protocol):
    """Lookup of constants declared outside the expression being evaluated.

    Implemented by the reflection engine, which locates and parses the
    classes and namespaces involved.
    """

    def class_constant(self, class_name: str, name: str) -> PhpValue:
        """Value of `class_name::name`, searched through ancestors.

        Enum cases evaluate to EnumCase.

        Raises:
            ClassNotFoundError: If the class cannot be located
            MemberNotFoundError: If no class in the hierarchy declares it
        """
        ...

    def has_namespace_constant(self, qualified_name: str) -> bool:
        """Whether a `const`/`define()` constant with this name is known."""
        ...

    def namespace_constant(self, qualified_name: str) -> PhpValue:
        """Value of a namespace-level constant.

        Raises:
            MemberNotFoundError: If the constant is not known
        """
        ...

    def enum_backing_value(self, class_name: str, case_name: str) -> PhpValue:
        """Backing value of a backed enum case.

        Raises:
            UnresolvableConstantExpression: If the enum is not backed
        """
        ...


@dataclass(frozen=True, slots=True)
class ResolutionScope:
    """Static position of an expression.

    Magic constants and `self`/`parent`/`static` are answered from here,
    never from execution state.

    Attributes:
        file_path: File declaring the expression
        namespace: Enclosing namespace, "" for global
        symbols: Imports of the enclosing namespace block
        class_name: Enclosing class-like, None outside classes
        class_kind: Kind of the enclosing class-like
        parent_name: Declared parent of the enclosing class
        function_name: Enclosing function or method short name
        trait_name: Trait the expression was written in, when it has been
            imported into a using class
    """

    file_path: Path
    namespace: str
    symbols: SymbolTable
    class_name: str | None = None
    class_kind: ClassKind | None = None
    parent_name: str | None = None
    function_name: str | None = None
    trait_name: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.file_path is None:
            raise TypeError("file_path must not be None")
        if self.class_kind is not None and self.class_name is None:
            raise ValueError("class_kind requires class_name")

    def in_function(self, function_name: str) -> ResolutionScope:
        """Scope of a function or method body inside this scope."""
        return replace(self, function_name=function_name)

    def imported_into(self, user: ResolutionScope) -> ResolutionScope:
        """Scope of a trait member copied into a using class.

        Names still resolve against the trait's file and imports, while
        `self`, `parent` and `__CLASS__` refer to the using class.
        """
        if user.class_name is None:
            raise ValueError("user scope must belong to a class-like")
        return replace(
            self,
            class_name=user.class_name,
            class_kind=user.class_kind,
            parent_name=user.parent_name,
            trait_name=self.trait_name or self.class_name,
        )

    @property
    def in_trait(self) -> bool:
        """Expression is declared inside a trait."""
        return self.trait_name is not None or self.class_kind is ClassKind.TRAIT

    @property
    def declaring_class_name(self) -> str | None:
        """Class-like whose body contains the expression."""
        return self.trait_name or self.class_name
