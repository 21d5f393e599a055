"""Class locators."""

from phpreflect.infrastructure.locators.composer import ComposerLocator
from phpreflect.infrastructure.locators.mapping import MappingLocator

__all__ = [
    "ComposerLocator",
    "MappingLocator",
]
