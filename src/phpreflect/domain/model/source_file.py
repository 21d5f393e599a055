"""Parsed source file and its namespace blocks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from phpreflect.domain.exceptions.parsing import NamespaceNotFoundError

if TYPE_CHECKING:
    from pathlib import Path

    from phpreflect.domain.model.location import SourceSpan
    from phpreflect.domain.model.syntax import SyntaxNode


@dataclass(frozen=True, slots=True)
class NamespaceBlock:
    """Statements belonging to one namespace declaration.

    A file without namespace declarations has one global block ("").
    An unbraced `namespace X;` block runs until the next namespace
    declaration or the end of the file.

    Attributes:
        name: Namespace name, "" for the global namespace
        statements: Top-level statements of the block
        file_path: Canonical path of the owning file
        node: `namespace_definition` node, or the file root for implicit global code
        span: Lines covered by the declaration
        doc_comment: Doc comment preceding the namespace declaration
        last_byte: Largest end offset among the declaration and its statements
    """

    name: str
    statements: tuple[SyntaxNode, ...]
    file_path: Path
    node: SyntaxNode
    span: SourceSpan
    doc_comment: str | None = None
    last_byte: int = 0

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.file_path is None:
            raise TypeError("file_path must not be None")
        if self.name.startswith("\\"):
            raise ValueError(f"namespace name must not start with a backslash: {self.name!r}")


@dataclass(frozen=True, slots=True)
class SourceFile:
    """One parsed PHP file.

    Immutable once parsed. Modification identity records what was read, it
    is never used to invalidate anything.

    Attributes:
        path: Canonical file path
        root: Root node of the syntax tree
        namespaces: Namespace blocks in declaration order
        strict_types: File starts with declare(strict_types=1)
        mtime_ns: Modification time at parse time, None for in-memory source
        size: Source size in bytes
    """

    path: Path
    root: SyntaxNode
    namespaces: tuple[NamespaceBlock, ...]
    strict_types: bool = False
    mtime_ns: int | None = None
    size: int = 0

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.path is None:
            raise TypeError("path must not be None")
        if not self.namespaces:
            raise ValueError("source file must have at least one namespace block")

    @property
    def namespace_names(self) -> tuple[str, ...]:
        """Names of all namespace blocks, in declaration order."""
        return tuple(block.name for block in self.namespaces)

    def namespace(self, name: str) -> NamespaceBlock:
        """Find the first namespace block with the given name.

        Namespace names are compared case-insensitively, as PHP does.

        Raises:
            NamespaceNotFoundError: If no block declares the namespace
        """
        wanted = name.lstrip("\\").lower()
        for block in self.namespaces:
            if block.name.lower() == wanted:
                return block
        raise NamespaceNotFoundError(self.path, name)
