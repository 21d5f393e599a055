"""Class-like declaration analyzer."""

from __future__ import annotations

from typing import TYPE_CHECKING

from phpreflect.domain.model.class_ import ClassDeclaration, TraitAlias
from phpreflect.domain.model.constant import ConstantDeclaration
from phpreflect.domain.model.enums import ClassKind, Modifier
from phpreflect.domain.model.property_ import PropertyDeclaration
from phpreflect.infrastructure.analyzers.base import (
    analyze_type,
    class_references,
    collect_modifiers,
    has_child,
    node_name,
    qualify,
    variable_name,
)
from phpreflect.infrastructure.analyzers.function_analyzer import FunctionAnalyzer

if TYPE_CHECKING:
    from phpreflect.domain.model.function import FunctionDeclaration
    from phpreflect.domain.model.symbol_table import SymbolTable
    from phpreflect.domain.model.syntax import SyntaxNode

CLASS_KINDS = {
    "class_declaration": ClassKind.CLASS,
    "interface_declaration": ClassKind.INTERFACE,
    "trait_declaration": ClassKind.TRAIT,
    "enum_declaration": ClassKind.ENUM,
}

_BODY_KINDS = ("declaration_list", "enum_declaration_list")
_BACKING_TYPE_KINDS = ("primitive_type", "named_type")


class ClassAnalyzer:
    """Extracts class, interface, trait and enum declarations.

    Stateless analyzer - no state between analyze() calls.
    """

    def __init__(self) -> None:
        self._function_analyzer = FunctionAnalyzer()

    def analyze(
        self,
        node: SyntaxNode,
        namespace: str,
        symbols: SymbolTable,
    ) -> ClassDeclaration:
        """Analyze class-like declaration node.

        Args:
            node: class/interface/trait/enum declaration node
            namespace: Enclosing namespace, "" for global
            symbols: Imports of the enclosing namespace

        Returns:
            ClassDeclaration

        Raises:
            TypeError: If required parameters are None (FAIL-FIRST)
            ValueError: If node is not a class-like declaration (FAIL-FIRST)
        """
        # FAIL-FIRST: validate required parameters
        if node is None:
            raise TypeError("node must not be None")
        if symbols is None:
            raise TypeError("symbols must not be None")
        kind = CLASS_KINDS.get(node.kind)
        if kind is None:
            raise ValueError(f"expected class-like declaration, got {node.kind}")

        name_node = node.child_by_field("name")
        if name_node is None:
            raise ValueError(f"{node.kind} without a name at line {node.line}")
        short_name = node_name(name_node)
        name = qualify(namespace, short_name)

        # Declared ancestors
        parent_name: str | None = None
        interface_names: tuple[str, ...] = ()
        base_clause = node.first_child_of_kind("base_clause")
        interface_clause = node.first_child_of_kind("class_interface_clause")
        match kind:
            case ClassKind.CLASS:
                parents = class_references(base_clause, symbols)
                parent_name = parents[0] if parents else None
                interface_names = class_references(interface_clause, symbols)
            case ClassKind.INTERFACE:
                interface_names = class_references(base_clause, symbols)
            case ClassKind.ENUM:
                interface_names = class_references(interface_clause, symbols)

        backing_type = None
        if kind is ClassKind.ENUM:
            backing_node = node.first_child_of_kind(*_BACKING_TYPE_KINDS)
            if backing_node is not None:
                backing_type = analyze_type(backing_node, symbols)

        is_readonly = has_child(node, "readonly_modifier")
        body = node.child_by_field("body") or node.first_child_of_kind(*_BODY_KINDS)
        members = _Members()
        if body is not None:
            self._collect_members(body, namespace, name, kind, symbols, is_readonly, members)

        return ClassDeclaration(
            name=name,
            short_name=short_name,
            namespace=namespace,
            kind=kind,
            span=node.span,
            node=node,
            parent_name=parent_name,
            interface_names=interface_names,
            trait_names=tuple(members.traits),
            trait_aliases=tuple(members.aliases),
            methods=tuple(members.methods),
            properties=tuple(sorted(members.properties, key=lambda p: p.span.start_byte)),
            constants=tuple(members.constants),
            is_abstract=has_child(node, "abstract_modifier"),
            is_final=has_child(node, "final_modifier"),
            is_readonly=is_readonly,
            enum_backing_type=backing_type,
            doc_comment=node.doc_comment,
        )

    def _collect_members(
        self,
        body: SyntaxNode,
        namespace: str,
        class_name: str,
        kind: ClassKind,
        symbols: SymbolTable,
        is_readonly: bool,
        members: _Members,
    ) -> None:
        """Collect declared members in one pass over the class body."""
        for item in body.named_children:
            match item.kind:
                case "method_declaration":
                    method = self._function_analyzer.analyze_method(
                        item, namespace, class_name, kind, symbols
                    )
                    members.methods.append(method)
                    if method.name.lower() == "__construct":
                        members.properties.extend(
                            _promoted_properties(method, class_name, is_readonly)
                        )

                case "property_declaration":
                    members.properties.extend(
                        _properties(item, class_name, symbols, is_readonly)
                    )

                case "const_declaration":
                    members.constants.extend(class_constants(item, class_name))

                case "enum_case":
                    members.constants.append(_enum_case(item, class_name))

                case "use_declaration":
                    members.traits.extend(class_references(item, symbols))
                    members.aliases.extend(_trait_aliases(item, symbols))


class _Members:
    """Accumulator for class body members."""

    __slots__ = ("methods", "properties", "constants", "traits", "aliases")

    def __init__(self) -> None:
        self.methods: list[FunctionDeclaration] = []
        self.properties: list[PropertyDeclaration] = []
        self.constants: list[ConstantDeclaration] = []
        self.traits: list[str] = []
        self.aliases: list[TraitAlias] = []


def class_constants(node: SyntaxNode, owner: str) -> list[ConstantDeclaration]:
    """Constants of one `const A = 1, B = 2;` group.

    Args:
        node: const_declaration node
        owner: Declaring class, or namespace for top-level constants

    Returns:
        One ConstantDeclaration per element
    """
    modifiers = collect_modifiers(node)
    result = []
    for element in node.children_of_kind("const_element"):
        name_node = element.first_child_of_kind("name")
        named = element.named_children
        if name_node is None or len(named) < 2:
            raise ValueError(f"malformed constant at line {element.line}")
        result.append(
            ConstantDeclaration(
                name=node_name(name_node),
                owner=owner,
                span=element.span,
                value=named[-1],
                modifiers=modifiers,
                doc_comment=element.doc_comment or node.doc_comment,
            )
        )
    return result


def _enum_case(node: SyntaxNode, class_name: str) -> ConstantDeclaration:
    """Enum case as a public constant."""
    name_node = node.child_by_field("name") or node.first_child_of_kind("name")
    if name_node is None:
        raise ValueError(f"enum case without a name at line {node.line}")
    return ConstantDeclaration(
        name=node_name(name_node),
        owner=class_name,
        span=node.span,
        value=_enum_case_value(node),
        modifiers=Modifier.IS_PUBLIC,
        is_enum_case=True,
        doc_comment=node.doc_comment,
    )


def _properties(
    node: SyntaxNode,
    class_name: str,
    symbols: SymbolTable,
    class_is_readonly: bool,
) -> list[PropertyDeclaration]:
    """Properties of one `public int $a = 1, $b;` declaration."""
    modifiers = collect_modifiers(node)
    if class_is_readonly and not modifiers & Modifier.IS_STATIC:
        modifiers |= Modifier.IS_READONLY

    type_node = node.child_by_field("type")
    type_ = analyze_type(type_node, symbols) if type_node else None

    result = []
    for element in node.children_of_kind("property_element"):
        name_node = element.child_by_field("name") or element.first_child_of_kind("variable_name")
        if name_node is None:
            raise ValueError(f"property without a name at line {element.line}")
        result.append(
            PropertyDeclaration(
                name=variable_name(name_node),
                class_name=class_name,
                modifiers=modifiers,
                span=element.span,
                type=type_,
                default=_property_default(element),
                doc_comment=node.doc_comment,
            )
        )
    return result


def _property_default(element: SyntaxNode) -> SyntaxNode | None:
    """Default value expression of a property element."""
    default = element.child_by_field("default_value")
    if default is not None:
        return default
    initializer = element.first_child_of_kind("property_initializer")
    if initializer is not None and initializer.named_children:
        return initializer.named_children[-1]
    return None


def _promoted_properties(
    constructor: FunctionDeclaration,
    class_name: str,
    class_is_readonly: bool,
) -> list[PropertyDeclaration]:
    """Properties declared through constructor parameters."""
    parameters_node = constructor.node.child_by_field("parameters")
    if parameters_node is None:
        return []

    promoted_nodes = parameters_node.children_of_kind("property_promotion_parameter")
    promoted = [p for p in constructor.parameters if p.is_promoted]
    extra = Modifier.IS_READONLY if class_is_readonly else Modifier(0)
    return [
        PropertyDeclaration(
            name=parameter.name,
            class_name=class_name,
            modifiers=(parameter.promoted_modifiers or Modifier.IS_PUBLIC) | extra,
            span=node.span,
            type=parameter.type,
            is_promoted=True,
            doc_comment=parameter.doc_comment,
        )
        for parameter, node in zip(promoted, promoted_nodes, strict=True)
    ]


def _trait_aliases(node: SyntaxNode, symbols: SymbolTable) -> list[TraitAlias]:
    """`as` adaptations of a trait use block."""
    use_list = node.first_child_of_kind("use_list")
    if use_list is None:
        return []

    aliases = []
    for clause in use_list.children_of_kind("use_as_clause"):
        named = clause.named_children
        if not named:
            continue
        target = named[0]
        trait_name: str | None = None
        if target.kind == "class_constant_access_expression":
            parts = target.named_children
            trait_name = symbols.resolve_class(node_name(parts[0]))
            method = node_name(parts[-1])
        else:
            method = node_name(target)

        alias_nodes = [n for n in named[1:] if n.kind == "name"]
        alias = node_name(alias_nodes[-1]) if alias_nodes else None
        aliases.append(TraitAlias(alias=alias, method=method, trait_name=trait_name))
    return aliases


def _enum_case_value(node: SyntaxNode) -> SyntaxNode | None:
    """Backing value expression of an enum case, None for pure cases."""
    value = node.child_by_field("value")
    if value is None and node.has_token("="):
        value = node.named_children[-1]
    return value
