"""Application services."""

from phpreflect.application.services.engine import ReflectionEngine

__all__ = [
    "ReflectionEngine",
]
