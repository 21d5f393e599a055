"""Reflection engine configuration.

None = use the built-in default, value = override.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from phpreflect.domain.model.values import EnumCase


@dataclass(frozen=True, slots=True)
class ReflectionConfig:
    """Engine configuration DTO.

    Immutable configuration object with FAIL-FIRST validation.

    Attributes:
        builtin_constants: Global constants known without a declaration
            (PHP_EOL, E_ALL, ...). Merged over the default table, entries
            here win. None = default table only.
        allowed_functions: Lowercase names of builtin functions the resolver
            may evaluate. None = every function the resolver implements.
        encoding: Source text encoding.
    """

    builtin_constants: Mapping[str, object] | None = None
    allowed_functions: frozenset[str] | None = None
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        """Validate configuration. FAIL-FIRST."""
        if self.builtin_constants is not None:
            for name, value in self.builtin_constants.items():
                if not name:
                    raise ValueError("builtin constant name must not be empty")
                if not isinstance(value, (int, float, str, bool, dict, EnumCase, type(None))):
                    raise TypeError(
                        f"builtin constant {name} must be a PHP value, got {type(value).__name__}"
                    )

        if self.allowed_functions is not None:
            for name in self.allowed_functions:
                if name != name.lower():
                    raise ValueError(f"allowed function names must be lowercase: {name}")

        if not self.encoding:
            raise ValueError("encoding must not be empty")
