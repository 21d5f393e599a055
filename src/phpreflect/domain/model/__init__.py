"""Domain model entities."""

from phpreflect.domain.model.class_ import ClassDeclaration, TraitAlias
from phpreflect.domain.model.configuration import ReflectionConfig
from phpreflect.domain.model.constant import ConstantDeclaration
from phpreflect.domain.model.enums import (
    VISIBILITY_MASK,
    ClassKind,
    ClassModifier,
    Modifier,
    ResolutionState,
)
from phpreflect.domain.model.function import FunctionDeclaration, StaticVariable
from phpreflect.domain.model.import_ import ImportKind, UseImport
from phpreflect.domain.model.location import SourceSpan
from phpreflect.domain.model.parameter import ParameterDeclaration
from phpreflect.domain.model.property_ import PropertyDeclaration
from phpreflect.domain.model.resolution import (
    ConstantKey,
    ConstantResolution,
    ConstantScope,
)
from phpreflect.domain.model.source_file import NamespaceBlock, SourceFile
from phpreflect.domain.model.symbol_table import SymbolTable
from phpreflect.domain.model.syntax import SyntaxNode
from phpreflect.domain.model.type_ import BUILTIN_TYPES, TypeDeclaration
from phpreflect.domain.model.values import EnumCase, PhpValue

__all__ = [
    # Syntax
    "SyntaxNode",
    "SourceSpan",
    "SourceFile",
    "NamespaceBlock",
    # Declarations
    "ClassDeclaration",
    "TraitAlias",
    "FunctionDeclaration",
    "StaticVariable",
    "ParameterDeclaration",
    "PropertyDeclaration",
    "ConstantDeclaration",
    "TypeDeclaration",
    "BUILTIN_TYPES",
    "UseImport",
    "ImportKind",
    "SymbolTable",
    # Enums
    "ClassKind",
    "Modifier",
    "ClassModifier",
    "VISIBILITY_MASK",
    "ResolutionState",
    # Resolution
    "ConstantKey",
    "ConstantScope",
    "ConstantResolution",
    "EnumCase",
    "PhpValue",
    # Configuration
    "ReflectionConfig",
]
