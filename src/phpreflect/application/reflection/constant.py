"""Reflection of class constants and enum cases."""

from __future__ import annotations

from typing import TYPE_CHECKING

from phpreflect.domain.model.enums import Modifier

if TYPE_CHECKING:
    from phpreflect.application.reflection.class_ import ReflectionClass
    from phpreflect.application.resolver.scope import ResolutionScope
    from phpreflect.domain.model.constant import ConstantDeclaration
    from phpreflect.domain.model.values import PhpValue


class ReflectionClassConstant:
    """Class constant or enum case.

    The value is evaluated on first request and cached by the engine, so
    every object reflecting the same constant sees the same outcome.
    """

    def __init__(
        self,
        declaration: ConstantDeclaration,
        declaring_class: ReflectionClass,
        scope: ResolutionScope | None = None,
    ) -> None:
        self._declaration = declaration
        self._declaring_class = declaring_class
        self.scope = scope if scope is not None else declaring_class.scope

    def __repr__(self) -> str:
        return f"ReflectionClassConstant({self.class_name}::{self.name})"

    @property
    def name(self) -> str:
        return self._declaration.name

    @property
    def class_name(self) -> str:
        return self._declaring_class.name

    @property
    def declaration(self) -> ConstantDeclaration:
        return self._declaration

    @property
    def doc_comment(self) -> str | None:
        return self._declaration.doc_comment

    @property
    def start_line(self) -> int:
        return self._declaration.span.start_line

    @property
    def end_line(self) -> int:
        return self._declaration.span.end_line

    def get_declaring_class(self) -> ReflectionClass:
        return self._declaring_class

    def imported_into(self, user: ReflectionClass) -> ReflectionClassConstant:
        """Copy of this trait member as a member of a using class."""
        scope = self.scope.imported_into(user.scope)
        return ReflectionClassConstant(self._declaration, user, scope)

    def get_modifiers(self) -> Modifier:
        return Modifier(self._declaration.modifiers)

    def is_public(self) -> bool:
        return bool(self.get_modifiers() & Modifier.IS_PUBLIC)

    def is_protected(self) -> bool:
        return bool(self.get_modifiers() & Modifier.IS_PROTECTED)

    def is_private(self) -> bool:
        return bool(self.get_modifiers() & Modifier.IS_PRIVATE)

    def is_final(self) -> bool:
        return bool(self.get_modifiers() & Modifier.IS_FINAL)

    def is_enum_case(self) -> bool:
        return self._declaration.is_enum_case

    def get_value(self) -> PhpValue:
        """Resolved value; enum cases evaluate to EnumCase.

        Raises:
            UnresolvableConstantExpression: If the expression needs execution
            CircularConstantError: If the constant depends on itself
        """
        return self._declaring_class.engine.class_constant_value(self._declaring_class, self)
