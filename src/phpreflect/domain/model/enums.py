"""Domain enumerations.

Modifier values match PHP's native reflection constants bit for bit, so
masks built here can be compared with numbers produced by a running PHP.
"""

from enum import Enum, IntFlag, auto


class ClassKind(Enum):
    """Kind of class-like declaration."""

    CLASS = auto()
    INTERFACE = auto()
    TRAIT = auto()
    ENUM = auto()


class Modifier(IntFlag):
    """Member modifiers (ReflectionMethod / ReflectionProperty / ReflectionClassConstant)."""

    IS_PUBLIC = 1
    IS_PROTECTED = 2
    IS_PRIVATE = 4
    IS_STATIC = 16
    IS_FINAL = 32
    IS_ABSTRACT = 64
    IS_READONLY = 128


class ClassModifier(IntFlag):
    """Class modifiers (ReflectionClass)."""

    IS_IMPLICIT_ABSTRACT = 16
    IS_FINAL = 32
    IS_EXPLICIT_ABSTRACT = 64
    IS_READONLY = 65536


VISIBILITY_MASK = Modifier.IS_PUBLIC | Modifier.IS_PROTECTED | Modifier.IS_PRIVATE


class ResolutionState(Enum):
    """Lifecycle of a constant's value.

    UNRESOLVED -> RESOLVING -> RESOLVED | FAILED. The last two are terminal.
    """

    UNRESOLVED = auto()
    RESOLVING = auto()
    RESOLVED = auto()
    FAILED = auto()
