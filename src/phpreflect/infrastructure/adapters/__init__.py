"""Infrastructure adapters for external interfaces."""

from phpreflect.infrastructure.adapters.cached_parser import CachedSourceParser
from phpreflect.infrastructure.adapters.tree_sitter_parser import TreeSitterSourceParser

__all__ = [
    "CachedSourceParser",
    "TreeSitterSourceParser",
]
