"""Base utilities for syntax tree analyzers."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from phpreflect.domain.model.enums import VISIBILITY_MASK, Modifier
from phpreflect.domain.model.symbol_table import SPECIAL_CLASS_NAMES
from phpreflect.domain.model.type_ import BUILTIN_TYPES, TypeDeclaration

if TYPE_CHECKING:
    from phpreflect.domain.model.symbol_table import SymbolTable
    from phpreflect.domain.model.syntax import SyntaxNode

# Nodes that open a new function scope; walks over a body must not enter them
FUNCTION_BOUNDARIES = frozenset(
    {
        "anonymous_function",
        "anonymous_function_creation_expression",
        "arrow_function",
        "function_definition",
        "method_declaration",
        "class_declaration",
        "declaration_list",
    }
)

NAME_KINDS = ("name", "qualified_name", "namespace_name")

_VISIBILITY = {
    "public": Modifier.IS_PUBLIC,
    "protected": Modifier.IS_PROTECTED,
    "private": Modifier.IS_PRIVATE,
}

_MODIFIER_NODES = {
    "static_modifier": Modifier.IS_STATIC,
    "final_modifier": Modifier.IS_FINAL,
    "abstract_modifier": Modifier.IS_ABSTRACT,
    "readonly_modifier": Modifier.IS_READONLY,
    "var_modifier": Modifier.IS_PUBLIC,
}


def node_name(node: SyntaxNode) -> str:
    """Name text of a name node with whitespace removed."""
    return "".join(node.text.split())


def variable_name(node: SyntaxNode) -> str:
    """Variable name without the leading `$`."""
    text = node_name(node)
    return text[1:] if text.startswith("$") else text


def qualify(namespace: str, name: str) -> str:
    """Prefix a declared short name with its namespace."""
    return f"{namespace}\\{name}" if namespace else name


def collect_modifiers(node: SyntaxNode) -> Modifier:
    """Collect member modifier bits from a declaration's modifier children.

    Members without an explicit visibility are public.

    Args:
        node: Method, property, constant or promoted parameter node

    Returns:
        Modifier flags
    """
    flags = Modifier(0)
    for child in node.children:
        if child.kind == "visibility_modifier":
            # Asymmetric visibility `private(set)` only affects writes
            if "(" not in child.text:
                flags |= _VISIBILITY[child.text.strip().lower()]
        elif child.kind in _MODIFIER_NODES:
            flags |= _MODIFIER_NODES[child.kind]

    if not flags & VISIBILITY_MASK:
        flags |= Modifier.IS_PUBLIC
    return flags


def has_child(node: SyntaxNode, kind: str) -> bool:
    """Check for a direct child of the given kind."""
    return node.first_child_of_kind(kind) is not None


def analyze_type(node: SyntaxNode, symbols: SymbolTable) -> TypeDeclaration:
    """Build TypeDeclaration from a type node.

    Class names are resolved against the symbol table. `T|null` collapses
    to a nullable named type, as PHP reports it.

    Args:
        node: Type node (named_type, optional_type, union_type, ...)
        symbols: Imports of the enclosing namespace

    Returns:
        TypeDeclaration

    Raises:
        ValueError: If node is not a type node
    """
    match node.kind:
        case "optional_type":
            inner = analyze_type(node.named_children[0], symbols)
            return replace(inner, allows_null=True)

        case "union_type" | "intersection_type" | "disjunctive_normal_form_type":
            members = tuple(analyze_type(child, symbols) for child in node.named_children)
            if node.kind == "intersection_type":
                name = "&".join(str(m) for m in members)
                return TypeDeclaration(name=name, members=members, is_intersection=True)

            non_null = tuple(m for m in members if m.name != "null")
            if len(members) == 2 and len(non_null) == 1:
                return replace(non_null[0], allows_null=True)
            name = "|".join(str(m) for m in members)
            allows_null = any(m.allows_null for m in members)
            return TypeDeclaration(name=name, allows_null=allows_null, members=members)

        case "primitive_type" | "bottom_type" | "named_type" | "name" | "qualified_name":
            return _named_type(node, symbols)

        case _:
            raise ValueError(f"unsupported type node: {node.kind}")


def _named_type(node: SyntaxNode, symbols: SymbolTable) -> TypeDeclaration:
    """Single named or builtin type."""
    text = node_name(node)
    lowered = text.lower()

    if lowered in BUILTIN_TYPES:
        return TypeDeclaration(
            name=lowered,
            allows_null=lowered in ("null", "mixed"),
            is_builtin=True,
        )
    if lowered in SPECIAL_CLASS_NAMES:
        return TypeDeclaration(name=lowered)
    return TypeDeclaration(name=symbols.resolve_class(text))


def class_references(node: SyntaxNode | None, symbols: SymbolTable) -> tuple[str, ...]:
    """Resolve every class name listed directly under a clause node.

    Args:
        node: base_clause, class_interface_clause or use_declaration, may be None
        symbols: Imports of the enclosing namespace

    Returns:
        Fully qualified names in declaration order
    """
    if node is None:
        return ()
    return tuple(
        symbols.resolve_class(node_name(child))
        for child in node.children
        if child.kind in ("name", "qualified_name")
    )
