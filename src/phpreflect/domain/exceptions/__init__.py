"""Domain exceptions."""

from phpreflect.domain.exceptions.base import PhpReflectError
from phpreflect.domain.exceptions.configuration import LocatorConfigurationError
from phpreflect.domain.exceptions.lookup import (
    ClassNotFoundError,
    DefaultValueUnavailableError,
    FunctionNotFoundError,
    InheritanceCycleError,
    MemberNotFoundError,
)
from phpreflect.domain.exceptions.parsing import NamespaceNotFoundError, ParseError
from phpreflect.domain.exceptions.resolution import (
    CircularConstantError,
    ResolutionError,
    UnresolvableConstantExpression,
)

__all__ = [
    "PhpReflectError",
    "ParseError",
    "NamespaceNotFoundError",
    "ClassNotFoundError",
    "FunctionNotFoundError",
    "MemberNotFoundError",
    "InheritanceCycleError",
    "DefaultValueUnavailableError",
    "LocatorConfigurationError",
    "ResolutionError",
    "CircularConstantError",
    "UnresolvableConstantExpression",
]
