"""Tests for application/reflection/namespace.py."""

from pathlib import Path

import pytest

from phpreflect.domain.exceptions.lookup import (
    ClassNotFoundError,
    FunctionNotFoundError,
    MemberNotFoundError,
)
from phpreflect.domain.exceptions.parsing import NamespaceNotFoundError
from phpreflect.domain.exceptions.resolution import UnresolvableConstantExpression
from tests.factories import DEFAULT_TEST_FILE, make_engine, reflect

BRACED = """<?php
declare(strict_types=1);

/** Models. */
namespace App\\Model {
    use App\\Contracts\\Entity as Base;
    use Psr\\Log\\LoggerInterface;

    const LIMIT = 10;
    const BROKEN = time();
    define('App\\Model\\DEFINED', LIMIT * 2);

    class User {}
    interface Repo {}

    function helper() {}
}

namespace {
    const GLOBAL_ONE = 1;

    function top() {}
}
"""


class TestReflectionFile:
    """Tests for ReflectionFile."""

    def test_namespaces_in_order(self) -> None:
        file = reflect(BRACED)
        assert [ns.name for ns in file.get_namespaces()] == ["App\\Model", ""]

    def test_strict_mode(self) -> None:
        assert reflect(BRACED).is_strict_mode()
        assert not reflect("<?php\nclass A {}\n").is_strict_mode()

    def test_file_name(self) -> None:
        assert reflect(BRACED).file_name == DEFAULT_TEST_FILE

    def test_has_namespace(self) -> None:
        file = reflect(BRACED)
        assert file.has_namespace("app\\model")
        assert file.has_namespace("\\App\\Model")
        assert not file.has_namespace("Other")

    def test_missing_namespace(self) -> None:
        with pytest.raises(NamespaceNotFoundError, match="Namespace Other is not declared"):
            reflect(BRACED).get_namespace("Other")

    def test_implicit_global_namespace(self) -> None:
        file = reflect("<?php\nfunction f() {}\n")
        assert [ns.name for ns in file.get_namespaces()] == [""]

    def test_unbraced_namespaces(self) -> None:
        code = "<?php\nnamespace A;\nclass X {}\nnamespace B;\nclass X {}\n"
        file = reflect(code)
        assert list(file.get_namespace("A").get_classes()) == ["A\\X"]
        assert list(file.get_namespace("B").get_classes()) == ["B\\X"]

    def test_same_object_per_block(self) -> None:
        file = reflect(BRACED)
        assert file.get_namespace("App\\Model") is file.get_namespace("App\\Model")

    def test_reflect_source_without_path(self) -> None:
        engine = make_engine()
        first = engine.reflect_source("<?php\nclass A {}\n")
        second = engine.reflect_source("<?php\nclass B {}\n")
        assert first.file_name != second.file_name
        assert first.file_name.suffix == ".php"


class TestReflectionNamespace:
    """Tests for ReflectionNamespace."""

    def test_position(self) -> None:
        namespace = reflect(BRACED).get_namespace("App\\Model")
        assert namespace.start_line == 5
        assert namespace.end_line == 17
        assert namespace.doc_comment == "/** Models. */"
        assert namespace.last_byte_offset > 0
        assert namespace.file_name == DEFAULT_TEST_FILE

    def test_classes(self) -> None:
        namespace = reflect(BRACED).get_namespace("App\\Model")
        assert list(namespace.get_classes()) == ["App\\Model\\User", "App\\Model\\Repo"]
        assert namespace.has_class("User")
        assert namespace.has_class("\\App\\Model\\user")
        assert namespace.get_class("User").name == "App\\Model\\User"

    def test_missing_class(self) -> None:
        namespace = reflect(BRACED).get_namespace("App\\Model")
        with pytest.raises(ClassNotFoundError, match="not declared in namespace"):
            namespace.get_class("Missing")

    def test_functions(self) -> None:
        file = reflect(BRACED)
        assert list(file.get_namespace("App\\Model").get_functions()) == ["App\\Model\\helper"]
        assert file.get_namespace("").get_function("top").name == "top"

    def test_missing_function(self) -> None:
        with pytest.raises(FunctionNotFoundError):
            reflect(BRACED).get_namespace("").get_function("helper")

    def test_aliases(self) -> None:
        namespace = reflect(BRACED).get_namespace("App\\Model")
        assert namespace.get_namespace_aliases() == {
            "App\\Contracts\\Entity": "Base",
            "Psr\\Log\\LoggerInterface": "LoggerInterface",
        }

    def test_constants_skip_unresolvable(self) -> None:
        namespace = reflect(BRACED).get_namespace("App\\Model")
        assert namespace.get_constants() == {"LIMIT": 10}

    def test_constants_with_defined(self) -> None:
        namespace = reflect(BRACED).get_namespace("App\\Model")
        assert namespace.get_constants(with_defined=True) == {
            "LIMIT": 10,
            "App\\Model\\DEFINED": 20,
        }

    def test_unresolvable_constant_raises(self) -> None:
        namespace = reflect(BRACED).get_namespace("App\\Model")
        with pytest.raises(UnresolvableConstantExpression):
            namespace.get_constant("BROKEN")

    def test_constants_are_case_sensitive(self) -> None:
        namespace = reflect(BRACED).get_namespace("App\\Model")
        assert namespace.has_constant("LIMIT")
        assert not namespace.has_constant("limit")
        with pytest.raises(MemberNotFoundError, match="Constant App\\\\Model::limit"):
            namespace.get_constant("limit")

    def test_global_constant_from_namespace(self) -> None:
        code = "<?php\nnamespace App;\nconst A = \\GLOBAL_ONE + 1;\n"
        engine = make_engine()
        engine.reflect_source("<?php\nconst GLOBAL_ONE = 1;\n", Path("/test/globals.php"))
        namespace = engine.reflect_source(code, DEFAULT_TEST_FILE).get_namespace("App")
        assert namespace.get_constant("A") == 2

    def test_unqualified_constant_falls_back_to_global(self) -> None:
        code = "<?php\nnamespace App;\nconst A = GLOBAL_ONE + PHP_INT_SIZE;\n"
        engine = make_engine()
        engine.reflect_source("<?php\nconst GLOBAL_ONE = 1;\n", Path("/test/globals.php"))
        namespace = engine.reflect_source(code, DEFAULT_TEST_FILE).get_namespace("App")
        assert namespace.get_constant("A") == 9

    def test_namespace_magic_constant(self) -> None:
        namespace = reflect("<?php\nnamespace App\\Sub;\nconst N = __NAMESPACE__;\n").get_namespace(
            "App\\Sub"
        )
        assert namespace.get_constant("N") == "App\\Sub"
