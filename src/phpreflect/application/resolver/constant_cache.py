"""Per-constant resolution state with cycle detection."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import structlog

from phpreflect.domain.exceptions.resolution import CircularConstantError
from phpreflect.domain.model.enums import ResolutionState
from phpreflect.domain.model.resolution import RESOLVING, UNRESOLVED, ConstantResolution

if TYPE_CHECKING:
    from collections.abc import Callable

    from phpreflect.domain.model.resolution import ConstantKey
    from phpreflect.domain.model.values import PhpValue

logger = structlog.get_logger()


@dataclass
class ConstantResolutionCache:
    """Resolves each constant at most once per cache lifetime.

    State per key: UNRESOLVED -> RESOLVING -> RESOLVED | FAILED.
    Re-entering a key that is RESOLVING raises CircularConstantError naming
    the chain of constants being resolved. Both terminal states are cached,
    so a failed constant fails again without being re-evaluated. Callers
    receive a copy of a resolved value; changing a returned array never
    changes the cached one.

    Attributes:
        _states: Key → resolution state
        _stack: Keys currently RESOLVING, outermost first
    """

    _states: dict[ConstantKey, ConstantResolution] = field(default_factory=dict)
    _stack: list[ConstantKey] = field(default_factory=list)

    def state(self, key: ConstantKey) -> ConstantResolution:
        """Current state of a constant (UNRESOLVED if never requested)."""
        return self._states.get(key, UNRESOLVED)

    def resolve(self, key: ConstantKey, compute: Callable[[], PhpValue]) -> PhpValue:
        """Return the value of a constant, computing it on first request.

        Args:
            key: Constant identity
            compute: Evaluates the constant's expression

        Returns:
            Copy of the resolved value

        Raises:
            CircularConstantError: If the constant is already being resolved
            Exception: The cached or new failure of the constant
        """
        current = self.state(key)
        if current.state is ResolutionState.RESOLVING:
            start = self._stack.index(key)
            chain = tuple(str(k) for k in self._stack[start:]) + (str(key),)
            raise CircularConstantError(chain)
        if current.is_terminal:
            return copy.deepcopy(current.unwrap())

        self._states[key] = RESOLVING
        self._stack.append(key)
        try:
            value = compute()
        except Exception as e:
            self._states[key] = ConstantResolution(ResolutionState.FAILED, error=e)
            logger.debug("constant_failed", constant=str(key), error=str(e))
            raise
        finally:
            self._stack.pop()

        self._states[key] = ConstantResolution(ResolutionState.RESOLVED, value=value)
        return copy.deepcopy(value)

    @property
    def in_progress(self) -> tuple[ConstantKey, ...]:
        """Keys currently being resolved, outermost first."""
        return tuple(self._stack)

    @property
    def size(self) -> int:
        """Number of constants with a recorded state."""
        return len(self._states)
