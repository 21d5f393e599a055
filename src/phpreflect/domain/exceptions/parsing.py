"""Parsing exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from phpreflect.domain.exceptions.base import PhpReflectError

if TYPE_CHECKING:
    from pathlib import Path


class ParseError(PhpReflectError):
    """Source file could not be read or is not valid PHP.

    Attributes:
        path: File that failed to parse
        reason: Why parsing failed
        line: 1-based line of the first syntax error, None if not syntax related
    """

    def __init__(self, path: Path, reason: str, line: int | None = None) -> None:
        # FAIL-FIRST: validate required parameters
        if path is None:
            raise TypeError("path must not be None")
        if not reason:
            raise ValueError("reason must be non-empty string")

        self.path = path
        self.reason = reason
        self.line = line
        where = f"{path}:{line}" if line is not None else f"{path}"
        super().__init__(f"Failed to parse {where}: {reason}")


class NamespaceNotFoundError(PhpReflectError, LookupError):
    """Requested namespace block is not declared in the file.

    Attributes:
        path: File that was searched
        namespace: Requested namespace name ("" for the global namespace)
    """

    def __init__(self, path: Path, namespace: str) -> None:
        if path is None:
            raise TypeError("path must not be None")

        self.path = path
        self.namespace = namespace
        shown = namespace or "<global>"
        super().__init__(f"Namespace {shown} is not declared in {path}")
