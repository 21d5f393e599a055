"""phpreflect - static reflection of PHP source without executing it."""

__version__ = "0.1.0"

from phpreflect.application.reflection import (
    ReflectionClass,
    ReflectionClassConstant,
    ReflectionFile,
    ReflectionFunction,
    ReflectionMethod,
    ReflectionNamespace,
    ReflectionParameter,
    ReflectionProperty,
)
from phpreflect.application.services import ReflectionEngine
from phpreflect.domain import (
    ClassModifier,
    EnumCase,
    Modifier,
    PhpReflectError,
    ReflectionConfig,
)
from phpreflect.infrastructure.locators import ComposerLocator, MappingLocator

__all__ = [
    "ClassModifier",
    "ComposerLocator",
    "EnumCase",
    "MappingLocator",
    "Modifier",
    "PhpReflectError",
    "ReflectionClass",
    "ReflectionClassConstant",
    "ReflectionConfig",
    "ReflectionEngine",
    "ReflectionFile",
    "ReflectionFunction",
    "ReflectionMethod",
    "ReflectionNamespace",
    "ReflectionParameter",
    "ReflectionProperty",
    "__version__",
]
