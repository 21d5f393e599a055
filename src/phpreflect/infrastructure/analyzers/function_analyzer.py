"""Function and method analyzer."""

from __future__ import annotations

from typing import TYPE_CHECKING

from phpreflect.domain.model.enums import ClassKind, Modifier
from phpreflect.domain.model.function import FunctionDeclaration, StaticVariable
from phpreflect.domain.model.parameter import ParameterDeclaration
from phpreflect.infrastructure.analyzers.base import (
    FUNCTION_BOUNDARIES,
    analyze_type,
    collect_modifiers,
    has_child,
    node_name,
    qualify,
    variable_name,
)

if TYPE_CHECKING:
    from phpreflect.domain.model.symbol_table import SymbolTable
    from phpreflect.domain.model.syntax import SyntaxNode

PARAMETER_KINDS = ("simple_parameter", "variadic_parameter", "property_promotion_parameter")


class FunctionAnalyzer:
    """Extracts function and method declarations.

    Stateless analyzer - no state between analyze() calls.
    """

    def analyze(
        self,
        node: SyntaxNode,
        namespace: str,
        symbols: SymbolTable,
    ) -> FunctionDeclaration:
        """Analyze a namespace-level function_definition node.

        Args:
            node: function_definition node
            namespace: Enclosing namespace, "" for global
            symbols: Imports of the enclosing namespace

        Returns:
            FunctionDeclaration

        Raises:
            TypeError: If required parameters are None (FAIL-FIRST)
            ValueError: If node has no name (FAIL-FIRST)
        """
        # FAIL-FIRST: validate required parameters
        if node is None:
            raise TypeError("node must not be None")
        if symbols is None:
            raise TypeError("symbols must not be None")

        name = _declared_name(node)
        return self._build(node, name, qualify(namespace, name), namespace, symbols)

    def analyze_method(
        self,
        node: SyntaxNode,
        namespace: str,
        class_name: str,
        class_kind: ClassKind,
        symbols: SymbolTable,
    ) -> FunctionDeclaration:
        """Analyze a method_declaration node.

        Interface methods are implicitly abstract.

        Args:
            node: method_declaration node
            namespace: Namespace of the declaring class
            class_name: Fully qualified declaring class
            class_kind: Kind of the declaring class
            symbols: Imports of the enclosing namespace

        Returns:
            FunctionDeclaration with class_name and modifiers set
        """
        if node is None:
            raise TypeError("node must not be None")
        if not class_name:
            raise ValueError("class_name must be non-empty string")

        name = _declared_name(node)
        modifiers = collect_modifiers(node)
        if class_kind is ClassKind.INTERFACE:
            modifiers |= Modifier.IS_ABSTRACT

        return self._build(
            node,
            name,
            f"{class_name}::{name}",
            namespace,
            symbols,
            class_name=class_name,
            modifiers=modifiers,
        )

    def _build(
        self,
        node: SyntaxNode,
        name: str,
        qualified_name: str,
        namespace: str,
        symbols: SymbolTable,
        class_name: str | None = None,
        modifiers: Modifier | int = 0,
    ) -> FunctionDeclaration:
        """Collect signature and body facts shared by functions and methods."""
        parameters_node = node.child_by_field("parameters")
        parameters = self.analyze_parameters(parameters_node, symbols) if parameters_node else ()

        return_type_node = node.child_by_field("return_type")
        return_type = analyze_type(return_type_node, symbols) if return_type_node else None

        body = node.child_by_field("body")
        return FunctionDeclaration(
            name=name,
            qualified_name=qualified_name,
            namespace=namespace,
            parameters=parameters,
            return_type=return_type,
            static_variables=_static_variables(body),
            span=node.span,
            node=node,
            class_name=class_name,
            modifiers=modifiers,
            returns_reference=has_child(node, "reference_modifier") or node.has_token("&"),
            is_generator=_is_generator(body),
            doc_comment=node.doc_comment,
        )

    def analyze_parameters(
        self,
        node: SyntaxNode,
        symbols: SymbolTable,
    ) -> tuple[ParameterDeclaration, ...]:
        """Extract parameters from a formal_parameters node.

        Args:
            node: formal_parameters node
            symbols: Imports of the enclosing namespace

        Returns:
            Parameters in signature order
        """
        return tuple(
            self._parameter(child, position, symbols)
            for position, child in enumerate(node.children_of_kind(*PARAMETER_KINDS))
        )

    def _parameter(
        self,
        node: SyntaxNode,
        position: int,
        symbols: SymbolTable,
    ) -> ParameterDeclaration:
        """Build one parameter."""
        name_node = node.child_by_field("name") or node.first_child_of_kind(
            "variable_name", "by_ref"
        )
        if name_node is None:
            raise ValueError(f"parameter without a name at line {node.line}")

        is_by_reference = has_child(node, "reference_modifier") or node.has_token("&")
        if name_node.kind == "by_ref":
            is_by_reference = True
            name_node = name_node.first_child_of_kind("variable_name") or name_node

        type_node = node.child_by_field("type")
        is_variadic = node.kind == "variadic_parameter" or node.has_token("...")
        promoted = None
        if node.kind == "property_promotion_parameter":
            promoted = collect_modifiers(node)

        return ParameterDeclaration(
            name=variable_name(name_node),
            position=position,
            type=analyze_type(type_node, symbols) if type_node else None,
            default=None if is_variadic else node.child_by_field("default_value"),
            is_by_reference=is_by_reference,
            is_variadic=is_variadic,
            promoted_modifiers=promoted,
            doc_comment=node.doc_comment,
        )


def _declared_name(node: SyntaxNode) -> str:
    """Name of a function or method declaration."""
    name_node = node.child_by_field("name")
    if name_node is None:
        raise ValueError(f"{node.kind} without a name at line {node.line}")
    return node_name(name_node)


def _static_variables(body: SyntaxNode | None) -> tuple[StaticVariable, ...]:
    """`static $x = expr;` declarations of a body, nested closures excluded."""
    if body is None:
        return ()

    variables: list[StaticVariable] = []
    for node in body.walk(stop_at=FUNCTION_BOUNDARIES):
        if node.kind != "static_variable_declaration":
            continue
        name_node = node.child_by_field("name") or node.first_child_of_kind("variable_name")
        if name_node is None:
            continue
        value = node.child_by_field("value")
        if value is None and len(node.named_children) > 1:
            value = node.named_children[-1]
        variables.append(StaticVariable(variable_name(name_node), value))
    return tuple(variables)


def _is_generator(body: SyntaxNode | None) -> bool:
    """Body contains `yield` outside nested functions."""
    if body is None:
        return False
    return any(
        node.kind == "yield_expression" for node in body.walk(stop_at=FUNCTION_BOUNDARIES)
    )
