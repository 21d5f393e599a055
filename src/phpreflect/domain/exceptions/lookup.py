"""Lookup exceptions: names absent from the requested scope."""

from __future__ import annotations

from phpreflect.domain.exceptions.base import PhpReflectError


class ClassNotFoundError(PhpReflectError, LookupError):
    """Class-like entity could not be found.

    Raised when the locator has no file for the class, or when the located
    file does not declare it.

    Attributes:
        class_name: Fully qualified class name that was requested
        reason: Optional detail (e.g. which file was searched)
    """

    def __init__(self, class_name: str, reason: str | None = None) -> None:
        if not class_name:
            raise ValueError("class_name must not be empty")

        self.class_name = class_name
        self.reason = reason
        message = f"Class {class_name} was not found"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class FunctionNotFoundError(PhpReflectError, LookupError):
    """Function is not declared in the requested scope.

    Attributes:
        function_name: Requested function name
    """

    def __init__(self, function_name: str) -> None:
        if not function_name:
            raise ValueError("function_name must not be empty")

        self.function_name = function_name
        super().__init__(f"Function {function_name}() does not exist")


class MemberNotFoundError(PhpReflectError, LookupError):
    """Member is not declared on the class, its ancestors or the namespace.

    Distinct from a member that exists but whose value failed to resolve.

    Attributes:
        owner: Class or namespace name that was searched
        kind: Member kind ("method", "property", "constant")
        name: Requested member name
    """

    def __init__(self, owner: str, kind: str, name: str) -> None:
        if not kind:
            raise ValueError("kind must not be empty")
        if not name:
            raise ValueError("name must not be empty")

        self.owner = owner
        self.kind = kind
        self.name = name
        shown_owner = owner or "<global>"
        super().__init__(f"{kind.capitalize()} {shown_owner}::{name} does not exist")


class InheritanceCycleError(PhpReflectError):
    """Parent/interface/trait chain refers back to a class being resolved.

    Attributes:
        chain: Class names in resolution order, ending with the repeated one
    """

    def __init__(self, chain: tuple[str, ...]) -> None:
        if len(chain) < 2:
            raise ValueError("inheritance cycle chain needs at least two entries")

        self.chain = chain
        super().__init__(f"Inheritance cycle detected: {' -> '.join(chain)}")


class DefaultValueUnavailableError(PhpReflectError, LookupError):
    """Parameter or property has no default value expression.

    Attributes:
        owner: Declaring function, method or class
        name: Parameter or property name
    """

    def __init__(self, owner: str, name: str) -> None:
        self.owner = owner
        self.name = name
        super().__init__(f"{owner}: ${name} has no default value")
