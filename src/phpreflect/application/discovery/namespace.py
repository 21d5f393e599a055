"""Single-pass discovery of the entities declared in a namespace block."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from phpreflect.application.resolver.scope import ResolutionScope
from phpreflect.domain.exceptions.base import PhpReflectError
from phpreflect.domain.model.constant import ConstantDeclaration
from phpreflect.domain.model.symbol_table import SymbolTable
from phpreflect.infrastructure.analyzers.base import node_name, qualify
from phpreflect.infrastructure.analyzers.class_analyzer import (
    CLASS_KINDS,
    ClassAnalyzer,
    class_constants,
)
from phpreflect.infrastructure.analyzers.function_analyzer import FunctionAnalyzer
from phpreflect.infrastructure.analyzers.import_analyzer import ImportAnalyzer

if TYPE_CHECKING:
    from collections.abc import Callable

    from phpreflect.domain.model.class_ import ClassDeclaration
    from phpreflect.domain.model.function import FunctionDeclaration
    from phpreflect.domain.model.source_file import NamespaceBlock
    from phpreflect.domain.model.syntax import SyntaxNode
    from phpreflect.domain.model.values import PhpValue

    NameResolver = Callable[[SyntaxNode, ResolutionScope], PhpValue]

logger = structlog.get_logger()

# Errors that mark a single malformed entity; anything else propagates
_ENTITY_ERRORS = (ValueError, TypeError, PhpReflectError)


@dataclass(frozen=True, slots=True)
class NamespaceContents:
    """Entities declared at the top level of one namespace block.

    Attributes:
        block: Scanned namespace block
        symbols: `use` imports of the block
        classes: Class-likes in declaration order
        functions: Functions in declaration order
        constants: `const` constants in declaration order
        defines: Constants registered with define(), named as given
        skipped: Descriptions of entities that failed to analyze
    """

    block: NamespaceBlock
    symbols: SymbolTable
    classes: tuple[ClassDeclaration, ...] = ()
    functions: tuple[FunctionDeclaration, ...] = ()
    constants: tuple[ConstantDeclaration, ...] = ()
    defines: tuple[ConstantDeclaration, ...] = ()
    skipped: tuple[str, ...] = ()

    @property
    def namespace(self) -> str:
        """Namespace name, "" for global."""
        return self.block.name

    def scope(self) -> ResolutionScope:
        """Resolution scope of namespace-level code."""
        return ResolutionScope(
            file_path=self.block.file_path,
            namespace=self.block.name,
            symbols=self.symbols,
        )

    def constant_name(self, constant: ConstantDeclaration) -> str:
        """Fully qualified name a constant is registered under."""
        if constant.is_defined:
            return constant.name
        return qualify(self.block.name, constant.name)


class NamespaceDiscovery:
    """Collects declarations from a namespace block's top-level statements.

    Exactly one pass, no recursion into nested blocks: only top-level
    statements introduce classes, functions and constants. Each malformed
    entity is logged and skipped without affecting its siblings.
    Results are memoized per block.
    """

    def __init__(self, name_resolver: NameResolver | None = None) -> None:
        """Initialize discovery.

        Args:
            name_resolver: Evaluates the name argument of define() calls.
                None = only plain string literals are accepted.
        """
        self._name_resolver = name_resolver
        self._class_analyzer = ClassAnalyzer()
        self._function_analyzer = FunctionAnalyzer()
        self._import_analyzer = ImportAnalyzer()
        self._cache: dict[tuple[str, int], NamespaceContents] = {}

    def discover(self, block: NamespaceBlock) -> NamespaceContents:
        """Scan a namespace block.

        Args:
            block: Namespace block to scan

        Returns:
            Declared entities (memoized per block)
        """
        key = (str(block.file_path), block.span.start_byte)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        contents = self._scan(block)
        self._cache[key] = contents
        logger.debug(
            "namespace_discovered",
            namespace=block.name or "<global>",
            path=str(block.file_path),
            classes=len(contents.classes),
            functions=len(contents.functions),
            constants=len(contents.constants) + len(contents.defines),
            skipped=len(contents.skipped),
        )
        return contents

    def _scan(self, block: NamespaceBlock) -> NamespaceContents:
        namespace = block.name
        symbols = SymbolTable(namespace=namespace)
        classes: list[ClassDeclaration] = []
        functions: list[FunctionDeclaration] = []
        constants: list[ConstantDeclaration] = []
        defines: list[ConstantDeclaration] = []
        skipped: list[str] = []

        for statement in block.statements:
            try:
                match statement.kind:
                    case "namespace_use_declaration":
                        for imp in self._import_analyzer.analyze(statement):
                            symbols.add_import(imp)
                    case kind if kind in CLASS_KINDS:
                        classes.append(self._class_analyzer.analyze(statement, namespace, symbols))
                    case "function_definition":
                        functions.append(
                            self._function_analyzer.analyze(statement, namespace, symbols)
                        )
                    case "const_declaration":
                        constants.extend(class_constants(statement, namespace))
                    case "expression_statement":
                        define = self._define(statement, block, symbols)
                        if define is not None:
                            defines.append(define)
            except _ENTITY_ERRORS as e:
                description = f"{statement.kind} at {block.file_path}:{statement.line}: {e}"
                logger.warning(
                    "entity_skipped",
                    kind=statement.kind,
                    path=str(block.file_path),
                    line=statement.line,
                    error=str(e),
                )
                skipped.append(description)

        return NamespaceContents(
            block=block,
            symbols=symbols,
            classes=tuple(classes),
            functions=tuple(functions),
            constants=tuple(constants),
            defines=tuple(defines),
            skipped=tuple(skipped),
        )

    def _define(
        self,
        statement: SyntaxNode,
        block: NamespaceBlock,
        symbols: SymbolTable,
    ) -> ConstantDeclaration | None:
        """Constant registered by a top-level `define('NAME', expr);` call."""
        call = statement.first_child_of_kind("function_call_expression")
        if call is None:
            return None
        function = call.child_by_field("function") or call.named_children[0]
        if node_name(function).lstrip("\\").lower() != "define":
            return None

        arguments_node = call.child_by_field("arguments") or call.first_child_of_kind("arguments")
        arguments = arguments_node.children_of_kind("argument") if arguments_node else ()
        if len(arguments) < 2:
            raise ValueError("define() expects a name and a value")

        name_node = arguments[0].named_children[-1]
        name = self._define_name(name_node, block, symbols)
        return ConstantDeclaration(
            name=name,
            owner=block.name,
            span=call.span,
            value=arguments[1].named_children[-1],
            is_defined=True,
            doc_comment=statement.doc_comment,
        )

    def _define_name(self, node: SyntaxNode, block: NamespaceBlock, symbols: SymbolTable) -> str:
        """Statically evaluate the name argument of define()."""
        if self._name_resolver is None:
            if node.kind != "string":
                raise ValueError(f"define() name is not a string literal: {node.text}")
            value: PhpValue = node.text[1:-1]
        else:
            scope = ResolutionScope(
                file_path=block.file_path, namespace=block.name, symbols=symbols
            )
            value = self._name_resolver(node, scope)

        if not isinstance(value, str) or not value:
            raise ValueError(f"define() name must be a non-empty string: {node.text}")
        return value.lstrip("\\")
