"""Base exceptions for phpreflect domain."""


class PhpReflectError(Exception):
    """Root exception for all phpreflect errors.

    All domain exceptions inherit from this.
    Allows catching all phpreflect-specific errors.
    """
