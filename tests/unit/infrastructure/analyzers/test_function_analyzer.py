"""Tests for infrastructure/analyzers/function_analyzer.py."""

import pytest

from phpreflect.domain.model.enums import ClassKind, Modifier
from phpreflect.domain.model.function import FunctionDeclaration
from phpreflect.domain.model.import_ import ImportKind, UseImport
from phpreflect.domain.model.symbol_table import SymbolTable
from phpreflect.domain.model.syntax import SyntaxNode
from phpreflect.infrastructure.analyzers.function_analyzer import FunctionAnalyzer
from tests.factories import make_node, parse_php


def get_function_node(code: str) -> SyntaxNode:
    """Extract the first function definition from code."""
    source = parse_php(code)
    for node in source.namespaces[0].statements:
        if node.kind == "function_definition":
            return node
    raise ValueError("Expected function definition")


def get_method_node(code: str) -> SyntaxNode:
    """Extract the first method of the first class from code."""
    source = parse_php(code)
    method = source.namespaces[0].statements[0].find_first("method_declaration")
    if method is None:
        raise ValueError("Expected method declaration")
    return method


def analyze(code: str, namespace: str = "App") -> FunctionDeclaration:
    symbols = SymbolTable(namespace=namespace)
    symbols.add_import(UseImport(name="Lib\\Model\\User", alias="User", kind=ImportKind.CLASS))
    return FunctionAnalyzer().analyze(get_function_node(code), namespace, symbols)


class TestFunctionAnalyzerBasic:
    """Tests for basic function analysis."""

    def test_simple_function(self) -> None:
        func = analyze("<?php\nnamespace App;\nfunction run() {}\n")

        assert func.name == "run"
        assert func.qualified_name == "App\\run"
        assert func.namespace == "App"
        assert func.parameters == ()
        assert func.return_type is None
        assert func.static_variables == ()
        assert func.class_name is None
        assert func.returns_reference is False
        assert func.is_generator is False
        assert func.is_method is False
        assert func.span.start_line == 3

    def test_global_function(self) -> None:
        func = analyze("<?php\nfunction helper() {}\n", namespace="")
        assert func.qualified_name == "helper"

    def test_return_type_resolved(self) -> None:
        func = analyze("<?php\nnamespace App;\nfunction find(): ?User {}\n")

        assert func.return_type is not None
        assert func.return_type.name == "Lib\\Model\\User"
        assert func.return_type.allows_null is True

    def test_returns_reference(self) -> None:
        func = analyze("<?php\nnamespace App;\nfunction &items() { static $x = []; return $x; }\n")
        assert func.returns_reference is True

    def test_doc_comment(self) -> None:
        func = analyze("<?php\nnamespace App;\n/** Runs. */\nfunction run() {}\n")
        assert func.doc_comment == "/** Runs. */"


class TestFunctionAnalyzerParameters:
    """Tests for parameter extraction."""

    def test_positions_and_defaults(self) -> None:
        code = "<?php\nnamespace App;\nfunction f(int $a, $b = [1, 2], string ...$rest) {}\n"
        func = analyze(code)

        assert [p.name for p in func.parameters] == ["a", "b", "rest"]
        assert [p.position for p in func.parameters] == [0, 1, 2]
        a, b, rest = func.parameters
        assert str(a.type) == "int"
        assert a.default is None
        assert b.type is None
        assert b.default is not None
        assert b.default.text == "[1, 2]"
        assert rest.is_variadic is True
        assert rest.default is None

    def test_by_reference(self) -> None:
        func = analyze("<?php\nnamespace App;\nfunction f(array &$items, &...$more) {}\n")

        items, more = func.parameters
        assert items.is_by_reference is True
        assert items.is_variadic is False
        assert more.is_by_reference is True
        assert more.is_variadic is True

    def test_class_typed_parameter(self) -> None:
        func = analyze("<?php\nnamespace App;\nfunction f(User|Other|null $u) {}\n")

        declared = func.parameters[0].type
        assert declared is not None
        assert declared.is_union is True
        assert str(declared) == "Lib\\Model\\User|App\\Other|null"


class TestFunctionAnalyzerBody:
    """Tests for static variables and generator detection."""

    def test_static_variables(self) -> None:
        code = "<?php\nnamespace App;\nfunction f() {\n    static $calls = 0, $seen;\n}\n"
        func = analyze(code)

        assert [v.name for v in func.static_variables] == ["calls", "seen"]
        assert func.static_variables[0].initializer is not None
        assert func.static_variables[0].initializer.text == "0"
        assert func.static_variables[1].initializer is None

    def test_nested_closure_statics_excluded(self) -> None:
        code = (
            "<?php\nnamespace App;\nfunction f() {\n"
            "    $g = function () { static $inner = 1; };\n}\n"
        )
        assert analyze(code).static_variables == ()

    def test_generator(self) -> None:
        code = "<?php\nnamespace App;\nfunction gen() {\n    yield 1;\n}\n"
        assert analyze(code).is_generator is True

    def test_yield_in_closure_is_not_generator(self) -> None:
        code = (
            "<?php\nnamespace App;\nfunction f() {\n"
            "    return function () { yield 1; };\n}\n"
        )
        assert analyze(code).is_generator is False


class TestFunctionAnalyzerMethods:
    """Tests for analyze_method()."""

    def test_method(self) -> None:
        code = (
            "<?php\nnamespace App;\nclass A {\n"
            "    protected static function make(): self {}\n}\n"
        )
        method = FunctionAnalyzer().analyze_method(
            get_method_node(code), "App", "App\\A", ClassKind.CLASS, SymbolTable(namespace="App")
        )

        assert method.name == "make"
        assert method.qualified_name == "App\\A::make"
        assert method.class_name == "App\\A"
        assert method.is_method is True
        assert method.modifiers == Modifier.IS_PROTECTED | Modifier.IS_STATIC
        assert method.return_type is not None
        assert method.return_type.name == "self"

    def test_default_visibility_is_public(self) -> None:
        code = "<?php\nnamespace App;\nclass A {\n    function run() {}\n}\n"
        method = FunctionAnalyzer().analyze_method(
            get_method_node(code), "App", "App\\A", ClassKind.CLASS, SymbolTable(namespace="App")
        )
        assert method.modifiers == Modifier.IS_PUBLIC

    def test_interface_method_is_abstract(self) -> None:
        code = "<?php\nnamespace App;\ninterface I {\n    public function run();\n}\n"
        method = FunctionAnalyzer().analyze_method(
            get_method_node(code), "App", "App\\I", ClassKind.INTERFACE, SymbolTable()
        )
        assert method.modifiers == Modifier.IS_PUBLIC | Modifier.IS_ABSTRACT


class TestFunctionAnalyzerValidation:
    """FAIL-FIRST validation tests."""

    def test_none_node_raises(self) -> None:
        with pytest.raises(TypeError, match="node"):
            FunctionAnalyzer().analyze(None, "App", SymbolTable())  # type: ignore[arg-type]

    def test_none_symbols_raises(self) -> None:
        node = make_node("function_definition")
        with pytest.raises(TypeError, match="symbols"):
            FunctionAnalyzer().analyze(node, "App", None)  # type: ignore[arg-type]

    def test_empty_class_name_raises(self) -> None:
        node = make_node("method_declaration")
        with pytest.raises(ValueError, match="class_name"):
            FunctionAnalyzer().analyze_method(node, "App", "", ClassKind.CLASS, SymbolTable())

    def test_missing_name_raises(self) -> None:
        with pytest.raises(ValueError, match="without a name"):
            FunctionAnalyzer().analyze(make_node("function_definition"), "App", SymbolTable())
