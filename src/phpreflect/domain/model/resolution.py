"""Per-constant resolution state."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from phpreflect.domain.model.enums import ResolutionState

if TYPE_CHECKING:
    from phpreflect.domain.model.values import PhpValue


class ConstantScope(Enum):
    """Where a constant is declared."""

    CLASS = "class"
    NAMESPACE = "namespace"


@dataclass(frozen=True, slots=True)
class ConstantKey:
    """Identity of one constant.

    Class constants are keyed by their declaring class, namespace constants
    by their fully qualified name with an empty scope name.

    Attributes:
        scope: Class or namespace constant
        scope_name: Lowercase declaring class for class constants, "" otherwise
        name: Constant name, case preserved
    """

    scope: ConstantScope
    scope_name: str
    name: str

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("constant name must not be empty")
        if self.scope is ConstantScope.CLASS and not self.scope_name:
            raise ValueError("class constant key needs a class name")
        if self.scope_name != self.scope_name.lower():
            raise ValueError(f"scope_name must be lowercase: {self.scope_name}")

    @classmethod
    def for_class(cls, class_name: str, name: str) -> ConstantKey:
        """Key of constant `name` declared in `class_name`."""
        return cls(ConstantScope.CLASS, class_name.lower(), name)

    @classmethod
    def for_namespace(cls, qualified_name: str) -> ConstantKey:
        """Key of a namespace constant, namespace part compared case-insensitively."""
        namespace, sep, short = qualified_name.rpartition("\\")
        return cls(ConstantScope.NAMESPACE, "", f"{namespace.lower()}{sep}{short}")

    def __str__(self) -> str:
        """Format as Class::NAME or Namespace\\NAME."""
        if self.scope is ConstantScope.CLASS:
            return f"{self.scope_name}::{self.name}"
        return self.name


@dataclass(frozen=True, slots=True)
class ConstantResolution:
    """Outcome of resolving one constant.

    Only RESOLVED carries a value and only FAILED carries an error.

    Attributes:
        state: Lifecycle state
        value: Resolved value (RESOLVED only)
        error: Failure (FAILED only)
    """

    state: ResolutionState
    value: PhpValue = None
    error: Exception | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.state is ResolutionState.FAILED and self.error is None:
            raise ValueError("FAILED resolution must carry an error")
        if self.state is not ResolutionState.FAILED and self.error is not None:
            raise ValueError(f"{self.state.name} resolution must not carry an error")
        if self.state is not ResolutionState.RESOLVED and self.value is not None:
            raise ValueError(f"{self.state.name} resolution must not carry a value")

    @property
    def is_terminal(self) -> bool:
        """RESOLVED or FAILED."""
        return self.state in (ResolutionState.RESOLVED, ResolutionState.FAILED)

    def unwrap(self) -> PhpValue:
        """Return the value or raise the recorded error.

        Raises:
            Exception: The recorded error of a FAILED resolution
            RuntimeError: If the resolution is not terminal
        """
        match self.state:
            case ResolutionState.RESOLVED:
                return self.value
            case ResolutionState.FAILED:
                if self.error is None:
                    raise RuntimeError("failed resolution carries no error")
                raise self.error
            case _:
                raise RuntimeError(f"constant is still {self.state.name}")


UNRESOLVED = ConstantResolution(ResolutionState.UNRESOLVED)
RESOLVING = ConstantResolution(ResolutionState.RESOLVING)
