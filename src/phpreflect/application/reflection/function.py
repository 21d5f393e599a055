"""Reflection of functions and methods."""

from __future__ import annotations

from typing import TYPE_CHECKING

from phpreflect.application.reflection.parameter import ReflectionParameter
from phpreflect.application.reflection.type_ import reflect_type
from phpreflect.domain.exceptions.lookup import MemberNotFoundError
from phpreflect.domain.model.enums import Modifier

if TYPE_CHECKING:
    from pathlib import Path

    from phpreflect.application.reflection.class_ import ReflectionClass
    from phpreflect.application.reflection.type_ import ReflectionType
    from phpreflect.application.resolver.scope import ResolutionScope
    from phpreflect.application.services.engine import ReflectionEngine
    from phpreflect.domain.model.function import FunctionDeclaration
    from phpreflect.domain.model.values import PhpValue


class ReflectionFunctionAbstract:
    """Signature and body facts shared by functions and methods.

    Attributes:
        engine: Engine that produced this object
        scope: Resolution scope of the function body
    """

    def __init__(
        self,
        engine: ReflectionEngine,
        declaration: FunctionDeclaration,
        scope: ResolutionScope,
    ) -> None:
        self.engine = engine
        self.scope = scope
        self._declaration = declaration
        self._parameters: tuple[ReflectionParameter, ...] | None = None

    @property
    def name(self) -> str:
        return self._declaration.name

    @property
    def short_name(self) -> str:
        return self._declaration.name

    @property
    def namespace_name(self) -> str:
        return self._declaration.namespace

    @property
    def declaration(self) -> FunctionDeclaration:
        return self._declaration

    @property
    def declaring_class(self) -> ReflectionClass | None:
        """Class declaring a method, None for functions."""
        return None

    @property
    def doc_comment(self) -> str | None:
        return self._declaration.doc_comment

    @property
    def file_name(self) -> Path:
        return self.scope.file_path

    @property
    def start_line(self) -> int:
        return self._declaration.span.start_line

    @property
    def end_line(self) -> int:
        return self._declaration.span.end_line

    def in_namespace(self) -> bool:
        return bool(self._declaration.namespace)

    def is_closure(self) -> bool:
        return False

    def is_internal(self) -> bool:
        return False

    def is_user_defined(self) -> bool:
        return True

    def is_generator(self) -> bool:
        """Body contains `yield`."""
        return self._declaration.is_generator

    def is_variadic(self) -> bool:
        """Last parameter collects remaining arguments."""
        return any(p.is_variadic for p in self._declaration.parameters)

    def returns_reference(self) -> bool:
        return self._declaration.returns_reference

    def get_parameters(self) -> tuple[ReflectionParameter, ...]:
        """Parameters in signature order (stable objects)."""
        if self._parameters is None:
            self._parameters = tuple(
                ReflectionParameter(parameter, self) for parameter in self._declaration.parameters
            )
        return self._parameters

    def get_number_of_parameters(self) -> int:
        return len(self._declaration.parameters)

    def get_number_of_required_parameters(self) -> int:
        """Position after the last parameter that must be passed."""
        required = 0
        for parameter in self._declaration.parameters:
            if parameter.default is None and not parameter.is_variadic:
                required = parameter.position + 1
        return required

    def has_return_type(self) -> bool:
        return self._declaration.return_type is not None

    def get_return_type(self) -> ReflectionType | None:
        declared = self._declaration.return_type
        return reflect_type(declared) if declared is not None else None

    def get_static_variables(self) -> dict[str, PhpValue]:
        """Initial values of `static` variables, None where uninitialized.

        Raises:
            UnresolvableConstantExpression: If an initializer needs execution
        """
        return {
            variable.name: (
                self.engine.resolve(variable.initializer, self.scope)
                if variable.initializer is not None
                else None
            )
            for variable in self._declaration.static_variables
        }


class ReflectionFunction(ReflectionFunctionAbstract):
    """Named function declared at namespace level."""

    def __repr__(self) -> str:
        return f"ReflectionFunction({self.name})"

    @property
    def name(self) -> str:
        """Fully qualified function name."""
        return self._declaration.qualified_name

    def is_disabled(self) -> bool:
        return False


class ReflectionMethod(ReflectionFunctionAbstract):
    """Method of a class-like.

    Trait methods are copied into the using class: it becomes the
    declaring class and `self` inside the method refers to it. A method
    imported through a trait alias carries the alias as its name.
    """

    def __init__(
        self,
        engine: ReflectionEngine,
        declaration: FunctionDeclaration,
        declaring_class: ReflectionClass,
        *,
        alias: str | None = None,
        scope: ResolutionScope | None = None,
    ) -> None:
        if scope is None:
            scope = declaring_class.scope.in_function(declaration.name)
        super().__init__(engine, declaration, scope)
        self._declaring_class = declaring_class
        self._alias = alias

    def __repr__(self) -> str:
        return f"ReflectionMethod({self.class_name}::{self.name})"

    @property
    def name(self) -> str:
        return self._alias or self._declaration.name

    @property
    def short_name(self) -> str:
        return self.name

    @property
    def class_name(self) -> str:
        """Fully qualified name of the declaring class."""
        return self._declaring_class.name

    @property
    def declaring_class(self) -> ReflectionClass:
        return self._declaring_class

    def get_declaring_class(self) -> ReflectionClass:
        return self._declaring_class

    def imported_into(
        self, user: ReflectionClass, *, alias: str | None = None
    ) -> ReflectionMethod:
        """Copy of this trait method as a member of a using class."""
        return ReflectionMethod(
            self.engine,
            self._declaration,
            user,
            alias=alias or self._alias,
            scope=self.scope.imported_into(user.scope),
        )

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

    def is_final(self) -> bool:
        return bool(self.get_modifiers() & Modifier.IS_FINAL)

    def is_abstract(self) -> bool:
        return bool(self.get_modifiers() & Modifier.IS_ABSTRACT)

    def is_constructor(self) -> bool:
        return self.name.lower() == "__construct"

    def is_destructor(self) -> bool:
        return self.name.lower() == "__destruct"

    def has_prototype(self) -> bool:
        try:
            self.get_prototype()
        except MemberNotFoundError:
            return False
        return True

    def get_prototype(self) -> ReflectionMethod:
        """Topmost inherited declaration this method overrides or implements.

        Interfaces take precedence over the parent class; constructors only
        have a prototype when an interface or abstract parent declares one.

        Raises:
            MemberNotFoundError: If the method has no prototype
            ClassNotFoundError: If an ancestor cannot be located
        """
        owner = self._declaring_class
        for ancestor in owner.get_interfaces().values():
            if ancestor.has_method(self.name):
                return ancestor.get_method(self.name)

        parent = owner.get_parent_class()
        if parent is not None and parent.has_method(self.name):
            method = parent.get_method(self.name)
            if not method.is_private() and (not self.is_constructor() or method.is_abstract()):
                try:
                    return method.get_prototype()
                except MemberNotFoundError:
                    return method
        raise MemberNotFoundError(owner.name, "method prototype", self.name)
