"""Reflection of class properties."""

from __future__ import annotations

from typing import TYPE_CHECKING

from phpreflect.application.reflection.type_ import reflect_type
from phpreflect.domain.model.enums import Modifier

if TYPE_CHECKING:
    from phpreflect.application.reflection.class_ import ReflectionClass
    from phpreflect.application.resolver.scope import ResolutionScope
    from phpreflect.application.reflection.type_ import ReflectionType
    from phpreflect.domain.model.property_ import PropertyDeclaration
    from phpreflect.domain.model.values import PhpValue


class ReflectionProperty:
    """Declared or constructor-promoted property."""

    def __init__(
        self,
        declaration: PropertyDeclaration,
        declaring_class: ReflectionClass,
        scope: ResolutionScope | None = None,
    ) -> None:
        self._declaration = declaration
        self._declaring_class = declaring_class
        self.scope = scope if scope is not None else declaring_class.scope

    def __repr__(self) -> str:
        return f"ReflectionProperty({self.class_name}::${self.name})"

    @property
    def name(self) -> str:
        return self._declaration.name

    @property
    def class_name(self) -> str:
        return self._declaring_class.name

    @property
    def declaration(self) -> PropertyDeclaration:
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

    def imported_into(self, user: ReflectionClass) -> ReflectionProperty:
        """Copy of this trait member as a member of a using class."""
        return ReflectionProperty(self._declaration, user, self.scope.imported_into(user.scope))

    def get_modifiers(self) -> Modifier:
        return Modifier(self._declaration.modifiers)

    def is_public(self) -> bool:
        return bool(self.get_modifiers() & Modifier.IS_PUBLIC)

    def is_protected(self) -> bool:
        return bool(self.get_modifiers() & Modifier.IS_PROTECTED)

    def is_private(self) -> bool:
        return bool(self.get_modifiers() & Modifier.IS_PRIVATE)

    def is_static(self) -> bool:
        return bool(self.get_modifiers() & Modifier.IS_STATIC)

    def is_readonly(self) -> bool:
        return bool(self.get_modifiers() & Modifier.IS_READONLY)

    def is_default(self) -> bool:
        """Declared in source rather than created dynamically (always True)."""
        return True

    def is_promoted(self) -> bool:
        return self._declaration.is_promoted

    def has_type(self) -> bool:
        return self._declaration.type is not None

    def get_type(self) -> ReflectionType | None:
        declared = self._declaration.type
        return reflect_type(declared) if declared is not None else None

    def has_default_value(self) -> bool:
        """Untyped properties default to null; typed ones only with an initializer."""
        if self._declaration.is_promoted:
            return False
        return self._declaration.default is not None or self._declaration.type is None

    def get_default_value(self) -> PhpValue:
        """Statically evaluated default, None when there is none.

        Raises:
            UnresolvableConstantExpression: If the initializer needs execution
        """
        default = self._declaration.default
        if default is None:
            return None
        return self._declaring_class.engine.resolve(default, self.scope)
