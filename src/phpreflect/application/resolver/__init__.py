"""Constant expression resolver."""

from phpreflect.application.resolver.builtins import BUILTIN_CONSTANTS, BUILTIN_FUNCTIONS
from phpreflect.application.resolver.constant_cache import ConstantResolutionCache
from phpreflect.application.resolver.expression import MAGIC_CONSTANTS, ExpressionResolver
from phpreflect.application.resolver.scope import ConstantProvider, ResolutionScope

__all__ = [
    "BUILTIN_CONSTANTS",
    "BUILTIN_FUNCTIONS",
    "MAGIC_CONSTANTS",
    "ConstantProvider",
    "ConstantResolutionCache",
    "ExpressionResolver",
    "ResolutionScope",
]
