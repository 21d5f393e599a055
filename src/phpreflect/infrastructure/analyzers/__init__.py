"""Syntax tree analyzers for PHP declarations."""

from phpreflect.infrastructure.analyzers.base import (
    analyze_type,
    class_references,
    collect_modifiers,
    node_name,
    qualify,
    variable_name,
)
from phpreflect.infrastructure.analyzers.class_analyzer import (
    CLASS_KINDS,
    ClassAnalyzer,
    class_constants,
)
from phpreflect.infrastructure.analyzers.function_analyzer import FunctionAnalyzer
from phpreflect.infrastructure.analyzers.import_analyzer import ImportAnalyzer

__all__ = [
    # Base utilities
    "analyze_type",
    "class_references",
    "collect_modifiers",
    "node_name",
    "qualify",
    "variable_name",
    # Analyzers
    "CLASS_KINDS",
    "ClassAnalyzer",
    "FunctionAnalyzer",
    "ImportAnalyzer",
    "class_constants",
]
