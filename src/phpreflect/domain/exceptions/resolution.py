"""Constant expression resolution exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from phpreflect.domain.exceptions.base import PhpReflectError

if TYPE_CHECKING:
    from phpreflect.domain.model.syntax import SyntaxNode


class ResolutionError(PhpReflectError):
    """Base for failures of static constant evaluation."""


class UnresolvableConstantExpression(ResolutionError):
    """Expression cannot be evaluated without executing code.

    Attributes:
        node: Offending syntax node
        reason: Why the node cannot be evaluated
    """

    def __init__(self, node: SyntaxNode, reason: str) -> None:
        # FAIL-FIRST: node is needed for diagnostics
        if node is None:
            raise TypeError("node must not be None")
        if not reason:
            raise ValueError("reason must not be empty")

        self.node = node
        self.reason = reason
        super().__init__(f"Cannot resolve `{node.text}` at line {node.span.start_line}: {reason}")


class CircularConstantError(ResolutionError):
    """Constant refers to itself directly or through other constants.

    Attributes:
        chain: Constant names in resolution order, ending with the repeated one
    """

    def __init__(self, chain: tuple[str, ...]) -> None:
        if not chain:
            raise ValueError("chain must not be empty")

        self.chain = chain
        super().__init__(f"Circular constant reference: {' -> '.join(chain)}")
