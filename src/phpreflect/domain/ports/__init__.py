"""Domain ports (interfaces/protocols)."""

from phpreflect.domain.ports.locator import LocatorPort
from phpreflect.domain.ports.source_parser import SourceParserPort

__all__ = [
    "LocatorPort",
    "SourceParserPort",
]
