"""phpreflect domain layer.

Pure domain logic with no external dependencies.
Only imports: typing, abc, dataclasses, enum, pathlib, collections.abc
"""

from phpreflect.domain.exceptions import (
    CircularConstantError,
    ClassNotFoundError,
    DefaultValueUnavailableError,
    FunctionNotFoundError,
    InheritanceCycleError,
    LocatorConfigurationError,
    MemberNotFoundError,
    NamespaceNotFoundError,
    ParseError,
    PhpReflectError,
    ResolutionError,
    UnresolvableConstantExpression,
)
from phpreflect.domain.model import (
    ClassDeclaration,
    ClassKind,
    ClassModifier,
    ConstantDeclaration,
    EnumCase,
    FunctionDeclaration,
    Modifier,
    NamespaceBlock,
    ParameterDeclaration,
    PropertyDeclaration,
    ReflectionConfig,
    SourceFile,
    SyntaxNode,
)
from phpreflect.domain.ports import LocatorPort, SourceParserPort

__all__ = [
    # Exceptions
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
    # Model
    "SyntaxNode",
    "SourceFile",
    "NamespaceBlock",
    "ClassDeclaration",
    "FunctionDeclaration",
    "ParameterDeclaration",
    "PropertyDeclaration",
    "ConstantDeclaration",
    "ClassKind",
    "Modifier",
    "ClassModifier",
    "EnumCase",
    "ReflectionConfig",
    # Ports
    "LocatorPort",
    "SourceParserPort",
]
