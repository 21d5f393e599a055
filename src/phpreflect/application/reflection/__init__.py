"""Reflection object model over parsed declarations."""

from phpreflect.application.reflection.class_ import ReflectionClass
from phpreflect.application.reflection.constant import ReflectionClassConstant
from phpreflect.application.reflection.function import (
    ReflectionFunction,
    ReflectionFunctionAbstract,
    ReflectionMethod,
)
from phpreflect.application.reflection.namespace import ReflectionFile, ReflectionNamespace
from phpreflect.application.reflection.parameter import ReflectionParameter
from phpreflect.application.reflection.property_ import ReflectionProperty
from phpreflect.application.reflection.type_ import (
    ReflectionIntersectionType,
    ReflectionNamedType,
    ReflectionType,
    ReflectionUnionType,
    reflect_type,
)

__all__ = [
    "ReflectionClass",
    "ReflectionClassConstant",
    "ReflectionFile",
    "ReflectionFunction",
    "ReflectionFunctionAbstract",
    "ReflectionIntersectionType",
    "ReflectionMethod",
    "ReflectionNamedType",
    "ReflectionNamespace",
    "ReflectionParameter",
    "ReflectionProperty",
    "ReflectionType",
    "ReflectionUnionType",
    "reflect_type",
]
