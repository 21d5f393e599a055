"""Reflection of function and method parameters."""

from __future__ import annotations

from typing import TYPE_CHECKING

from phpreflect.application.reflection.type_ import implicitly_nullable, reflect_type
from phpreflect.domain.exceptions.lookup import DefaultValueUnavailableError

if TYPE_CHECKING:
    from phpreflect.application.reflection.class_ import ReflectionClass
    from phpreflect.application.reflection.function import ReflectionFunctionAbstract
    from phpreflect.application.reflection.type_ import ReflectionType
    from phpreflect.domain.model.parameter import ParameterDeclaration
    from phpreflect.domain.model.values import PhpValue


class ReflectionParameter:
    """One parameter of a reflected function or method.

    Default values are evaluated in the scope of the declaring function,
    so `self::X` and `__FUNCTION__` mean what they mean in its signature.
    """

    def __init__(
        self,
        declaration: ParameterDeclaration,
        function: ReflectionFunctionAbstract,
    ) -> None:
        self._declaration = declaration
        self._function = function

    def __repr__(self) -> str:
        return f"ReflectionParameter(${self.name} of {self._function.name})"

    @property
    def name(self) -> str:
        """Parameter name without `$`."""
        return self._declaration.name

    @property
    def declaration(self) -> ParameterDeclaration:
        return self._declaration

    @property
    def doc_comment(self) -> str | None:
        return self._declaration.doc_comment

    def get_position(self) -> int:
        """Zero-based position in the signature."""
        return self._declaration.position

    def get_declaring_function(self) -> ReflectionFunctionAbstract:
        return self._function

    def get_declaring_class(self) -> ReflectionClass | None:
        """Class declaring the method, None for plain functions."""
        return self._function.declaring_class

    def has_type(self) -> bool:
        return self._declaration.type is not None

    def get_type(self) -> ReflectionType | None:
        """Declared type; a `null` default makes it implicitly nullable."""
        declared = self._declaration.type
        if declared is None:
            return None
        if self._has_null_default():
            declared = implicitly_nullable(declared)
        return reflect_type(declared)

    def allows_null(self) -> bool:
        """Untyped parameters, nullable types and `= null` defaults accept null."""
        reflected = self.get_type()
        return reflected is None or reflected.allows_null()

    def is_optional(self) -> bool:
        """No argument is required at this position.

        A parameter with a default that precedes a required one is required.
        """
        return self.get_position() >= self._function.get_number_of_required_parameters()

    def is_variadic(self) -> bool:
        return self._declaration.is_variadic

    def is_passed_by_reference(self) -> bool:
        return self._declaration.is_by_reference

    def can_be_passed_by_value(self) -> bool:
        return not self._declaration.is_by_reference

    def is_promoted(self) -> bool:
        """Constructor parameter that also declares a property."""
        return self._declaration.is_promoted

    def is_default_value_available(self) -> bool:
        return self._declaration.default is not None

    def get_default_value(self) -> PhpValue:
        """Statically evaluate the default value.

        Returns:
            Default value

        Raises:
            DefaultValueUnavailableError: If the parameter has no default
            UnresolvableConstantExpression: If the default needs execution
        """
        default = self._declaration.default
        if default is None:
            raise DefaultValueUnavailableError(self._function.name, self.name)
        return self._function.engine.resolve(default, self._function.scope)

    def is_default_value_constant(self) -> bool:
        """Default value is a single constant reference."""
        return self.get_default_value_constant_name() is not None

    def get_default_value_constant_name(self) -> str | None:
        """Name of the constant used as default value, None if it is not one.

        Raises:
            DefaultValueUnavailableError: If the parameter has no default
        """
        default = self._declaration.default
        if default is None:
            raise DefaultValueUnavailableError(self._function.name, self.name)
        return self._function.engine.constant_name(default, self._function.scope)

    def _has_null_default(self) -> bool:
        default = self._declaration.default
        return default is not None and default.text.strip().lstrip("\\").lower() == "null"
