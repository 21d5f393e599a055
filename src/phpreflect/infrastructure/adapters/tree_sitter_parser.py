"""Tree-sitter based source parser adapter.

Implements SourceParserPort using the tree-sitter PHP grammar.
Converts the tree-sitter parse tree into immutable SyntaxNode records and
splits the file into namespace blocks.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import TYPE_CHECKING

import structlog
import tree_sitter
import tree_sitter_php

from phpreflect.domain.exceptions.parsing import ParseError
from phpreflect.domain.model.location import SourceSpan
from phpreflect.domain.model.source_file import NamespaceBlock, SourceFile
from phpreflect.domain.model.syntax import SyntaxNode
from phpreflect.domain.ports.source_parser import SourceParserPort

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = structlog.get_logger()

# Top-level nodes that never belong to a namespace block
_NON_STATEMENTS = frozenset({"php_tag", "text", "text_interpolation", "comment"})


@dataclass(slots=True)
class _Frame:
    """Pending node of the iterative tree conversion."""

    node: tree_sitter.Node
    field_name: str | None
    index: int = 0
    children: list[SyntaxNode] = field(default_factory=list)


class TreeSitterSourceParser(SourceParserPort):
    """Parser using tree-sitter-php to extract PHP syntax trees.

    Stateless between parse calls apart from the reusable tree-sitter parser.

    FAIL-FIRST: raises ParseError on unreadable files and on any syntax
    error reported by tree-sitter.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        """Initialize parser.

        Args:
            encoding: Encoding of PHP sources

        Raises:
            ValueError: If encoding is empty
        """
        if not encoding:
            raise ValueError("encoding must not be empty")

        self._encoding = encoding
        self._parser = tree_sitter.Parser()
        self._parser.language = tree_sitter.Language(tree_sitter_php.language_php())

    def parse_file(self, path: Path) -> SourceFile:
        """Parse single PHP file.

        Args:
            path: Path to .php file

        Returns:
            Parsed SourceFile with canonical path

        Raises:
            ParseError: If file cannot be read or parsed
        """
        canonical = Path(path).resolve()

        # Read file - FAIL-FIRST on file errors
        try:
            content = canonical.read_bytes()
            stat = canonical.stat()
        except FileNotFoundError as e:
            raise ParseError(canonical, "file not found") from e
        except PermissionError as e:
            raise ParseError(canonical, "permission denied") from e
        except OSError as e:
            raise ParseError(canonical, f"cannot read file: {e}") from e

        logger.debug("parsing_file", path=str(canonical), size=len(content))
        return self._parse(content, canonical, stat.st_mtime_ns)

    def parse_source(self, text: str, path: Path) -> SourceFile:
        """Parse in-memory PHP source.

        Args:
            text: PHP source, including the opening tag
            path: Path reported for the source

        Returns:
            Parsed SourceFile without modification identity

        Raises:
            ParseError: If text is not valid PHP
        """
        try:
            content = text.encode(self._encoding)
        except UnicodeEncodeError as e:
            raise ParseError(path, f"encoding error: {e}") from e
        return self._parse(content, Path(path), None)

    def _parse(self, content: bytes, path: Path, mtime_ns: int | None) -> SourceFile:
        """Parse bytes into a SourceFile."""
        try:
            content.decode(self._encoding)
        except UnicodeDecodeError as e:
            raise ParseError(path, f"encoding error: {e}") from e

        tree = self._parser.parse(content)
        if tree.root_node.has_error:
            line = _first_error_line(tree.root_node)
            raise ParseError(path, "syntax error", line)

        root = self._convert(tree.root_node, content)
        namespaces = tuple(_split_namespaces(root, path))

        return SourceFile(
            path=path,
            root=root,
            namespaces=namespaces,
            strict_types=_declares_strict_types(root),
            mtime_ns=mtime_ns,
            size=len(content),
        )

    def _convert(self, root: tree_sitter.Node, content: bytes) -> SyntaxNode:
        """Convert a tree-sitter tree into SyntaxNode records.

        Iterative post-order walk, long operator chains nest deeper than
        the interpreter recursion limit.
        """
        stack = [_Frame(root, None)]
        while True:
            frame = stack[-1]
            if frame.index < frame.node.child_count:
                index = frame.index
                frame.index += 1
                child = frame.node.child(index)
                if child is not None:
                    stack.append(_Frame(child, frame.node.field_name_for_child(index)))
                continue

            stack.pop()
            node = self._build(frame, content)
            if not stack:
                return node
            stack[-1].children.append(node)

    def _build(self, frame: _Frame, content: bytes) -> SyntaxNode:
        """Create the SyntaxNode for a finished frame."""
        ts_node = frame.node
        start_line = ts_node.start_point[0] + 1
        end_line = max(ts_node.end_point[0] + 1, start_line)
        return SyntaxNode(
            kind=ts_node.type,
            text=content[ts_node.start_byte : ts_node.end_byte].decode(self._encoding),
            span=SourceSpan(start_line, end_line, ts_node.start_byte, ts_node.end_byte),
            children=_attach_doc_comments(frame.children),
            field=frame.field_name,
            is_named=ts_node.is_named,
        )


def _first_error_line(root: tree_sitter.Node) -> int:
    """Line of the first ERROR or missing node, depth-first."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node.start_point[0] + 1
        stack.extend(reversed(node.children))
    return root.start_point[0] + 1


def _attach_doc_comments(children: Iterable[SyntaxNode]) -> tuple[SyntaxNode, ...]:
    """Drop comment nodes, attaching a `/** */` comment to the next named sibling."""
    result: list[SyntaxNode] = []
    pending: str | None = None
    for child in children:
        if child.kind == "comment":
            if child.text.startswith("/**"):
                pending = child.text
            continue
        if pending is not None and child.is_named:
            child = replace(child, doc_comment=pending)
            pending = None
        result.append(child)
    return tuple(result)


def _statements(node: SyntaxNode) -> tuple[SyntaxNode, ...]:
    """Named child statements, skipping tags and inline HTML."""
    return tuple(c for c in node.named_children if c.kind not in _NON_STATEMENTS)


def _split_namespaces(root: SyntaxNode, path: Path) -> Iterable[NamespaceBlock]:
    """Split top-level statements into namespace blocks.

    Braced blocks carry their own statements. An unbraced declaration owns
    every following statement up to the next namespace declaration. A file
    without declarations has one implicit global block.
    """
    top_level = _statements(root)
    if not any(stmt.kind == "namespace_definition" for stmt in top_level):
        yield NamespaceBlock(
            name="",
            statements=top_level,
            file_path=path,
            node=root,
            span=root.span,
            last_byte=root.span.end_byte,
        )
        return

    current: SyntaxNode | None = None
    collected: list[SyntaxNode] = []
    for stmt in top_level:
        if stmt.kind != "namespace_definition":
            # Statements before the first declaration (declare) belong to no block
            if current is not None:
                collected.append(stmt)
            continue

        if current is not None:
            yield _unbraced_block(current, collected, path)
            current, collected = None, []

        body = stmt.child_by_field("body")
        if body is None:
            current = stmt
            continue
        yield NamespaceBlock(
            name=_namespace_name(stmt),
            statements=_statements(body),
            file_path=path,
            node=stmt,
            span=stmt.span,
            doc_comment=stmt.doc_comment,
            last_byte=stmt.span.end_byte,
        )

    if current is not None:
        yield _unbraced_block(current, collected, path)


def _unbraced_block(decl: SyntaxNode, statements: list[SyntaxNode], path: Path) -> NamespaceBlock:
    """Build the block of a `namespace X;` declaration."""
    last = statements[-1] if statements else decl
    return NamespaceBlock(
        name=_namespace_name(decl),
        statements=tuple(statements),
        file_path=path,
        node=decl,
        span=SourceSpan(
            decl.span.start_line, last.span.end_line, decl.span.start_byte, last.span.end_byte
        ),
        doc_comment=decl.doc_comment,
        last_byte=last.span.end_byte,
    )


def _namespace_name(decl: SyntaxNode) -> str:
    """Name of a namespace declaration, "" for `namespace { }`."""
    name = decl.child_by_field("name")
    if name is None:
        return ""
    return "".join(name.text.split()).lstrip("\\")


def _declares_strict_types(root: SyntaxNode) -> bool:
    """File-level declare(strict_types=1)."""
    for stmt in root.named_children:
        if stmt.kind != "declare_statement":
            continue
        for directive in stmt.children_of_kind("declare_directive"):
            if "".join(directive.text.split()).lower() == "strict_types=1":
                return True
    return False
