"""Tests for declaration models (class_, function, parameter, property_, constant, type_)."""

from pathlib import Path

import pytest

from phpreflect.domain.exceptions.parsing import NamespaceNotFoundError
from phpreflect.domain.model.class_ import ClassDeclaration
from phpreflect.domain.model.constant import ConstantDeclaration
from phpreflect.domain.model.enums import ClassKind, Modifier
from phpreflect.domain.model.function import FunctionDeclaration
from phpreflect.domain.model.parameter import ParameterDeclaration
from phpreflect.domain.model.property_ import PropertyDeclaration
from phpreflect.domain.model.source_file import NamespaceBlock, SourceFile
from phpreflect.domain.model.type_ import TypeDeclaration
from tests.factories import make_node, make_span


def make_function(**overrides: object) -> FunctionDeclaration:
    fields: dict[str, object] = {
        "name": "run",
        "qualified_name": "App\\run",
        "namespace": "App",
        "parameters": (),
        "return_type": None,
        "static_variables": (),
        "span": make_span(),
        "node": make_node("function_definition", "function run() {}"),
    }
    fields.update(overrides)
    return FunctionDeclaration(**fields)  # type: ignore[arg-type]


class TestTypeDeclaration:
    """Tests for TypeDeclaration rendering."""

    def test_named(self) -> None:
        assert str(TypeDeclaration("int", is_builtin=True)) == "int"

    def test_nullable(self) -> None:
        assert str(TypeDeclaration("App\\Foo", allows_null=True)) == "?App\\Foo"

    def test_mixed_is_not_prefixed(self) -> None:
        assert str(TypeDeclaration("mixed", allows_null=True, is_builtin=True)) == "mixed"

    def test_union(self) -> None:
        members = (
            TypeDeclaration("int", is_builtin=True),
            TypeDeclaration("string", is_builtin=True),
        )
        union = TypeDeclaration("int|string", members=members)
        assert union.is_union
        assert str(union) == "int|string"

    def test_intersection(self) -> None:
        members = (TypeDeclaration("A"), TypeDeclaration("B"))
        intersection = TypeDeclaration("A&B", members=members, is_intersection=True)
        assert not intersection.is_union
        assert str(intersection) == "A&B"

    def test_empty_name_fails(self) -> None:
        with pytest.raises(ValueError):
            TypeDeclaration("")


class TestParameterDeclaration:
    """Tests for ParameterDeclaration validation."""

    def test_negative_position_fails(self) -> None:
        with pytest.raises(ValueError, match="position"):
            ParameterDeclaration(name="a", position=-1)

    def test_variadic_with_default_fails(self) -> None:
        with pytest.raises(ValueError, match="variadic"):
            ParameterDeclaration(
                name="a", position=0, is_variadic=True, default=make_node("integer", "1")
            )

    def test_promoted(self) -> None:
        param = ParameterDeclaration(name="a", position=0, promoted_modifiers=Modifier.IS_PRIVATE)
        assert param.is_promoted


class TestFunctionDeclaration:
    """Tests for FunctionDeclaration validation."""

    def test_function_is_not_method(self) -> None:
        assert not make_function().is_method

    def test_method(self) -> None:
        method = make_function(qualified_name="App\\Foo::run", class_name="App\\Foo")
        assert method.is_method

    def test_positions_must_be_sequential(self) -> None:
        params = (ParameterDeclaration(name="a", position=1),)
        with pytest.raises(ValueError, match="position"):
            make_function(parameters=params)

    def test_function_modifiers_fail(self) -> None:
        with pytest.raises(ValueError, match="modifiers"):
            make_function(modifiers=Modifier.IS_PUBLIC)

    def test_name_must_appear_in_qualified_name(self) -> None:
        with pytest.raises(ValueError, match="qualified_name"):
            make_function(qualified_name="App\\other")


class TestClassDeclaration:
    """Tests for ClassDeclaration validation."""

    def _make(self, **overrides: object) -> ClassDeclaration:
        fields: dict[str, object] = {
            "name": "App\\Foo",
            "short_name": "Foo",
            "namespace": "App",
            "kind": ClassKind.CLASS,
            "span": make_span(),
            "node": make_node("class_declaration", "class Foo {}"),
        }
        fields.update(overrides)
        return ClassDeclaration(**fields)  # type: ignore[arg-type]

    def test_abstract_final_fails(self) -> None:
        with pytest.raises(ValueError, match="abstract and final"):
            self._make(is_abstract=True, is_final=True)

    def test_interface_with_parent_fails(self) -> None:
        with pytest.raises(ValueError, match="parent"):
            self._make(kind=ClassKind.INTERFACE, parent_name="App\\Base")

    def test_name_mismatch_fails(self) -> None:
        with pytest.raises(ValueError, match="short name"):
            self._make(short_name="Bar")

    def test_backing_type_only_for_enums(self) -> None:
        with pytest.raises(ValueError, match="backing type"):
            self._make(enum_backing_type=TypeDeclaration("int", is_builtin=True))


class TestConstantAndPropertyDeclaration:
    """Tests for ConstantDeclaration and PropertyDeclaration validation."""

    def test_constant_needs_value(self) -> None:
        with pytest.raises(ValueError, match="value expression"):
            ConstantDeclaration(name="A", owner="Foo", span=make_span(), value=None)

    def test_pure_enum_case_has_no_value(self) -> None:
        case = ConstantDeclaration(
            name="Hearts", owner="Suit", span=make_span(), value=None, is_enum_case=True
        )
        assert case.value is None

    def test_promoted_property_without_default(self) -> None:
        with pytest.raises(ValueError, match="promoted"):
            PropertyDeclaration(
                name="a",
                class_name="Foo",
                modifiers=Modifier.IS_PUBLIC,
                span=make_span(),
                default=make_node("integer", "1"),
                is_promoted=True,
            )


class TestSourceFile:
    """Tests for SourceFile and NamespaceBlock."""

    def _file(self) -> SourceFile:
        root = make_node("program", "<?php")
        blocks = tuple(
            NamespaceBlock(
                name=name, statements=(), file_path=Path("/a.php"), node=root, span=make_span()
            )
            for name in ("App\\Models", "App\\Http")
        )
        return SourceFile(path=Path("/a.php"), root=root, namespaces=blocks)

    def test_namespace_names(self) -> None:
        assert self._file().namespace_names == ("App\\Models", "App\\Http")

    def test_namespace_lookup_is_case_insensitive(self) -> None:
        assert self._file().namespace("\\app\\http").name == "App\\Http"

    def test_missing_namespace(self) -> None:
        with pytest.raises(NamespaceNotFoundError):
            self._file().namespace("App\\Console")

    def test_needs_a_block(self) -> None:
        with pytest.raises(ValueError, match="namespace block"):
            SourceFile(path=Path("/a.php"), root=make_node("program", "x"), namespaces=())

    def test_block_name_without_backslash(self) -> None:
        with pytest.raises(ValueError, match="backslash"):
            NamespaceBlock(
                name="\\App",
                statements=(),
                file_path=Path("/a.php"),
                node=make_node("program", "x"),
                span=make_span(),
            )
