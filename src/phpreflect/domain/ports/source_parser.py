"""Source parser port (interface)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from phpreflect.domain.model.source_file import NamespaceBlock, SourceFile


class SourceParserPort(ABC):
    """Port for parsing PHP source.

    Infrastructure layer must provide implementation.
    """

    @abstractmethod
    def parse_file(self, path: Path) -> SourceFile:
        """Parse single PHP file.

        Args:
            path: Path to .php file

        Returns:
            Parsed SourceFile

        Raises:
            ParseError: If file cannot be read or is not valid PHP
        """
        ...

    @abstractmethod
    def parse_source(self, text: str, path: Path) -> SourceFile:
        """Parse in-memory PHP source.

        Args:
            text: PHP source, including the opening tag
            path: Path reported for the source (used by __FILE__ and errors)

        Returns:
            Parsed SourceFile

        Raises:
            ParseError: If text is not valid PHP
        """
        ...

    def namespace_blocks(self, path: Path) -> tuple[NamespaceBlock, ...]:
        """All namespace blocks of a file, in declaration order."""
        return self.parse_file(path).namespaces

    def parse_namespace_block(self, path: Path, name: str) -> NamespaceBlock:
        """Parse a file and return one of its namespace blocks.

        Args:
            path: Path to .php file
            name: Namespace name, "" for the global namespace

        Returns:
            First block declaring the namespace

        Raises:
            ParseError: If file cannot be parsed
            NamespaceNotFoundError: If the file does not declare the namespace
        """
        return self.parse_file(path).namespace(name)
