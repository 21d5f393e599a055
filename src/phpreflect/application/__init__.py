"""Application layer for static reflection.

Components:
- discovery: Entities declared in namespace blocks
- resolver: Constant expression evaluation with PHP semantics
- reflection: Reflection object model (classes, functions, parameters, ...)
- reporters: Output formatting (rich console)
- services: Main facade (ReflectionEngine)
"""

from phpreflect.application.discovery import NamespaceContents, NamespaceDiscovery
from phpreflect.application.reflection import (
    ReflectionClass,
    ReflectionClassConstant,
    ReflectionFile,
    ReflectionFunction,
    ReflectionMethod,
    ReflectionNamedType,
    ReflectionNamespace,
    ReflectionParameter,
    ReflectionProperty,
    ReflectionType,
    ReflectionUnionType,
)
from phpreflect.application.reporters import ConsoleConfig, ConsoleReporter
from phpreflect.application.resolver import ConstantResolutionCache, ExpressionResolver
from phpreflect.application.services import ReflectionEngine

__all__ = [
    # Discovery
    "NamespaceContents",
    "NamespaceDiscovery",
    # Resolver
    "ConstantResolutionCache",
    "ExpressionResolver",
    # Reflection
    "ReflectionClass",
    "ReflectionClassConstant",
    "ReflectionFile",
    "ReflectionFunction",
    "ReflectionMethod",
    "ReflectionNamedType",
    "ReflectionNamespace",
    "ReflectionParameter",
    "ReflectionProperty",
    "ReflectionType",
    "ReflectionUnionType",
    # Reporters
    "ConsoleConfig",
    "ConsoleReporter",
    # Services
    "ReflectionEngine",
]
