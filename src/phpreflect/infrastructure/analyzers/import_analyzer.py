"""Namespace `use` statement analyzer."""

from __future__ import annotations

from typing import TYPE_CHECKING

from phpreflect.domain.model.import_ import ImportKind, UseImport
from phpreflect.infrastructure.analyzers.base import NAME_KINDS, node_name

if TYPE_CHECKING:
    from phpreflect.domain.model.syntax import SyntaxNode

_CLAUSE_KINDS = ("namespace_use_clause", "namespace_use_group_clause")


class ImportAnalyzer:
    """Extracts imports from `namespace_use_declaration` nodes.

    Stateless analyzer - no state between analyze() calls.

    Handles plain, aliased, `function`, `const` and grouped forms:
        use A\\B, C\\D as E;
        use function A\\f;
        use A\\{B, function c, const D as E};
    """

    def analyze(self, node: SyntaxNode) -> tuple[UseImport, ...]:
        """Extract all imports of one `use` statement.

        Args:
            node: namespace_use_declaration node

        Returns:
            Tuple of UseImport objects in declaration order

        Raises:
            TypeError: If node is None (FAIL-FIRST)
            ValueError: If node is not a use declaration (FAIL-FIRST)
        """
        # FAIL-FIRST: validate required parameters
        if node is None:
            raise TypeError("node must not be None")
        if node.kind != "namespace_use_declaration":
            raise ValueError(f"expected namespace_use_declaration, got {node.kind}")

        statement_kind = _import_kind(node, ImportKind.CLASS)

        group = node.find_first("namespace_use_group")
        if group is None:
            return tuple(
                self._clause(clause, "", statement_kind)
                for clause in node.children_of_kind(*_CLAUSE_KINDS)
            )

        # Group prefix: the name written before `\{`
        prefix_node = node.first_child_of_kind(*NAME_KINDS)
        prefix = node_name(prefix_node).strip("\\") if prefix_node is not None else ""
        return tuple(
            self._clause(clause, prefix, statement_kind)
            for clause in group.children_of_kind(*_CLAUSE_KINDS)
        )

    def _clause(self, clause: SyntaxNode, prefix: str, default_kind: ImportKind) -> UseImport:
        """Build one import from a use clause."""
        names = clause.children_of_kind(*NAME_KINDS)
        if not names:
            raise ValueError(f"use clause without a name at line {clause.line}")

        imported = node_name(names[0]).lstrip("\\")
        if prefix:
            imported = f"{prefix}\\{imported}"

        alias = _alias(clause, names)
        if alias is None:
            alias = imported.rpartition("\\")[2]

        return UseImport(
            name=imported,
            alias=alias,
            kind=_import_kind(clause, default_kind),
            line=clause.line,
        )


def _alias(clause: SyntaxNode, names: tuple[SyntaxNode, ...]) -> str | None:
    """Explicit `as` alias of a use clause, None if absent."""
    aliased = clause.child_by_field("alias")
    if aliased is not None:
        return node_name(aliased)

    aliasing_clause = clause.first_child_of_kind("namespace_aliasing_clause")
    if aliasing_clause is not None:
        alias_name = aliasing_clause.first_child_of_kind("name")
        if alias_name is not None:
            return node_name(alias_name)

    if clause.has_token("as") and len(names) > 1:
        return node_name(names[-1])
    return None


def _import_kind(node: SyntaxNode, default: ImportKind) -> ImportKind:
    """`function`/`const` keyword written directly in the node."""
    if node.has_token("function"):
        return ImportKind.FUNCTION
    if node.has_token("const"):
        return ImportKind.CONSTANT
    type_node = node.child_by_field("type")
    if type_node is not None:
        return ImportKind(type_node.text.strip().lower())
    return default
