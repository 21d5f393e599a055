"""Normalized syntax tree node.

The parser adapter converts the external parse tree into these records so
that analyzers and the expression resolver depend on a closed, immutable
node shape: a kind tag, ordered children, the field label each child holds
in its parent, and position metadata.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from phpreflect.domain.model.location import SourceSpan


@dataclass(frozen=True, slots=True)
class SyntaxNode:
    """One node of a parsed PHP source tree.

    Attributes:
        kind: Grammar node type ("class_declaration", "binary_expression", "+", ...)
        text: Exact source text covered by the node
        span: Position of the node
        children: Child nodes in source order, comments removed
        field: Field label this node holds in its parent, None if unlabeled
        is_named: False for anonymous tokens (punctuation, operators, keywords)
        doc_comment: `/** ... */` comment directly preceding the node, if any
    """

    kind: str
    text: str
    span: SourceSpan
    children: tuple[SyntaxNode, ...] = ()
    field: str | None = None
    is_named: bool = True
    doc_comment: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.kind:
            raise ValueError("node kind must not be empty")

    @property
    def line(self) -> int:
        """Line the node starts on."""
        return self.span.start_line

    @property
    def named_children(self) -> tuple[SyntaxNode, ...]:
        """Children that are grammar rules, not anonymous tokens."""
        return tuple(child for child in self.children if child.is_named)

    def child_by_field(self, name: str) -> SyntaxNode | None:
        """First child holding the given field label."""
        for child in self.children:
            if child.field == name:
                return child
        return None

    def children_by_field(self, name: str) -> tuple[SyntaxNode, ...]:
        """All children holding the given field label."""
        return tuple(child for child in self.children if child.field == name)

    def first_child_of_kind(self, *kinds: str) -> SyntaxNode | None:
        """First direct child whose kind is one of `kinds`."""
        for child in self.children:
            if child.kind in kinds:
                return child
        return None

    def children_of_kind(self, *kinds: str) -> tuple[SyntaxNode, ...]:
        """Direct children whose kind is one of `kinds`."""
        return tuple(child for child in self.children if child.kind in kinds)

    def has_token(self, token: str) -> bool:
        """Check for an anonymous token child, compared case-insensitively."""
        lowered = token.lower()
        return any(not c.is_named and c.kind.lower() == lowered for c in self.children)

    def walk(self, *, stop_at: frozenset[str] = frozenset()) -> Iterator[SyntaxNode]:
        """Yield descendants depth-first, not entering nodes of `stop_at` kinds.

        Nodes of a `stop_at` kind are yielded themselves, but their subtrees
        are skipped. The node itself is not yielded.
        """
        stack = list(reversed(self.children))
        while stack:
            node = stack.pop()
            yield node
            if node.kind not in stop_at:
                stack.extend(reversed(node.children))

    def find_first(self, *kinds: str) -> SyntaxNode | None:
        """First descendant (depth-first) whose kind is one of `kinds`."""
        for node in self.walk():
            if node.kind in kinds:
                return node
        return None
