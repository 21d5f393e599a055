"""Reflection of declared types."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from phpreflect.domain.model.type_ import TypeDeclaration

if TYPE_CHECKING:
    from collections.abc import Sequence

_NULL = TypeDeclaration(name="null", allows_null=True, is_builtin=True)


@dataclass(frozen=True, slots=True)
class ReflectionType:
    """Base of all reflected types.

    Attributes:
        declaration: Underlying type declaration
    """

    declaration: TypeDeclaration

    def allows_null(self) -> bool:
        """Null is an accepted value."""
        return self.declaration.allows_null

    def __str__(self) -> str:
        """Render the type as PHP prints it."""
        return str(self.declaration)


@dataclass(frozen=True, slots=True)
class ReflectionNamedType(ReflectionType):
    """Single named type (`int`, `?Foo`, `self`)."""

    def get_name(self) -> str:
        """Type name without the nullability marker."""
        return self.declaration.name

    def is_builtin(self) -> bool:
        """Scalar or pseudo type rather than a class."""
        return self.declaration.is_builtin


@dataclass(frozen=True, slots=True)
class ReflectionUnionType(ReflectionType):
    """`A|B` union type."""

    def get_types(self) -> list[ReflectionType]:
        """Member types in declaration order."""
        return [reflect_type(member) for member in self.declaration.members]


@dataclass(frozen=True, slots=True)
class ReflectionIntersectionType(ReflectionType):
    """`A&B` intersection type."""

    def get_types(self) -> list[ReflectionType]:
        """Member types in declaration order."""
        return [reflect_type(member) for member in self.declaration.members]


def reflect_type(declaration: TypeDeclaration) -> ReflectionType:
    """Wrap a type declaration in the matching reflection class."""
    if declaration.is_intersection:
        return ReflectionIntersectionType(declaration)
    if declaration.members:
        return ReflectionUnionType(declaration)
    return ReflectionNamedType(declaration)


def implicitly_nullable(declaration: TypeDeclaration) -> TypeDeclaration:
    """Type of a parameter whose default value is `null`.

    `int $x = null` behaves as `?int`; a union gains a `null` member.
    """
    if declaration.allows_null or declaration.is_intersection:
        return declaration
    if declaration.members:
        members: Sequence[TypeDeclaration] = (*declaration.members, _NULL)
        return replace(
            declaration,
            name="|".join(str(member) for member in members),
            allows_null=True,
            members=tuple(members),
        )
    return replace(declaration, allows_null=True)
