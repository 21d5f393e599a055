"""Declared type value object."""

from dataclasses import dataclass

BUILTIN_TYPES = frozenset(
    {
        "array",
        "bool",
        "callable",
        "false",
        "float",
        "int",
        "iterable",
        "mixed",
        "never",
        "null",
        "object",
        "string",
        "true",
        "void",
    }
)


@dataclass(frozen=True, slots=True)
class TypeDeclaration:
    """Type written on a parameter, property or return.

    Named types resolve class names to fully qualified form; `self`,
    `static` and `parent` are kept as written.

    Attributes:
        name: Type name for named types, full text for compound types
        allows_null: `?T`, `T|null`, `null` or `mixed`
        is_builtin: Scalar/pseudo type rather than a class
        members: Member types of a union or intersection, empty for named types
        is_intersection: Members combine with `&` instead of `|`
    """

    name: str
    allows_null: bool = False
    is_builtin: bool = False
    members: tuple["TypeDeclaration", ...] = ()
    is_intersection: bool = False

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("type name must not be empty")

    @property
    def is_union(self) -> bool:
        """Union of two or more types."""
        return bool(self.members) and not self.is_intersection

    def __str__(self) -> str:
        """Render like PHP's ReflectionType::__toString()."""
        if self.members:
            separator = "&" if self.is_intersection else "|"
            return separator.join(str(member) for member in self.members)
        if self.allows_null and self.name not in ("null", "mixed"):
            return f"?{self.name}"
        return self.name
