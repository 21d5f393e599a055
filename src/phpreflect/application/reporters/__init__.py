"""Reporters for reflected PHP entities."""

from phpreflect.application.reporters.console import (
    ConsoleConfig,
    ConsoleReporter,
    format_signature,
    format_value,
    modifier_names,
)

__all__ = [
    "ConsoleConfig",
    "ConsoleReporter",
    "format_signature",
    "format_value",
    "modifier_names",
]
