"""Tests for application/reflection/type_.py."""

from phpreflect.application.reflection.type_ import (
    ReflectionIntersectionType,
    ReflectionNamedType,
    ReflectionUnionType,
    implicitly_nullable,
    reflect_type,
)
from phpreflect.domain.model.type_ import TypeDeclaration

INT = TypeDeclaration(name="int", is_builtin=True)
STRING = TypeDeclaration(name="string", is_builtin=True)
FOO = TypeDeclaration(name="App\\Foo")
BAR = TypeDeclaration(name="App\\Bar")
FOO_AND_BAR = TypeDeclaration(name="App\\Foo&App\\Bar", members=(FOO, BAR), is_intersection=True)


class TestReflectType:
    """Tests for reflect_type dispatch."""

    def test_named(self) -> None:
        reflected = reflect_type(INT)
        assert isinstance(reflected, ReflectionNamedType)
        assert reflected.get_name() == "int"
        assert reflected.is_builtin()
        assert not reflected.allows_null()

    def test_class_type(self) -> None:
        reflected = reflect_type(FOO)
        assert isinstance(reflected, ReflectionNamedType)
        assert not reflected.is_builtin()

    def test_union(self) -> None:
        union = TypeDeclaration(name="int|string", members=(INT, STRING))
        reflected = reflect_type(union)
        assert isinstance(reflected, ReflectionUnionType)
        assert [str(t) for t in reflected.get_types()] == ["int", "string"]
        assert str(reflected) == "int|string"

    def test_intersection(self) -> None:
        reflected = reflect_type(FOO_AND_BAR)
        assert isinstance(reflected, ReflectionIntersectionType)
        assert str(reflected) == "App\\Foo&App\\Bar"
        assert len(reflected.get_types()) == 2


class TestImplicitlyNullable:
    """Tests for the `= null` default rule."""

    def test_named_becomes_nullable(self) -> None:
        nullable = implicitly_nullable(INT)
        assert nullable.allows_null
        assert str(nullable) == "?int"

    def test_union_gains_null_member(self) -> None:
        union = TypeDeclaration(name="int|string", members=(INT, STRING))
        nullable = implicitly_nullable(union)
        assert nullable.allows_null
        assert str(nullable) == "int|string|null"
        assert nullable.members[-1].name == "null"

    def test_already_nullable_is_unchanged(self) -> None:
        mixed = TypeDeclaration(name="mixed", allows_null=True, is_builtin=True)
        assert implicitly_nullable(mixed) is mixed
        assert str(reflect_type(mixed)) == "mixed"

    def test_intersection_is_unchanged(self) -> None:
        assert implicitly_nullable(FOO_AND_BAR) is FOO_AND_BAR
