"""Console reporter: ReflectionClass → rich formatted string."""

from __future__ import annotations

from dataclasses import dataclass
from io import StringIO
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table
from rich.text import Text

from phpreflect.application.resolver.php_semantics import float_to_string
from phpreflect.domain.exceptions.base import PhpReflectError
from phpreflect.domain.model.enums import ClassKind, ClassModifier, Modifier
from phpreflect.domain.model.values import EnumCase

if TYPE_CHECKING:
    from collections.abc import Callable

    from phpreflect.application.reflection.class_ import ReflectionClass
    from phpreflect.application.reflection.function import ReflectionMethod
    from phpreflect.application.reflection.parameter import ReflectionParameter
    from phpreflect.domain.model.values import PhpValue

_KIND_LABELS = {
    ClassKind.CLASS: "class",
    ClassKind.INTERFACE: "interface",
    ClassKind.TRAIT: "trait",
    ClassKind.ENUM: "enum",
}


@dataclass(frozen=True, slots=True)
class ConsoleConfig:
    """Configuration for console reporter.

    Attributes:
        show_inherited: Include members declared by ancestors.
        show_values: Evaluate constant and property defaults.
        color: Emit ANSI styling.
        width: Console width in columns.
    """

    show_inherited: bool = True
    show_values: bool = True
    color: bool = True
    width: int = 120


def modifier_names(modifiers: Modifier | int) -> list[str]:
    """Keywords of member modifier bits, in PHP's order."""
    names = []
    if modifiers & Modifier.IS_ABSTRACT:
        names.append("abstract")
    if modifiers & Modifier.IS_FINAL:
        names.append("final")
    for flag, name in (
        (Modifier.IS_PUBLIC, "public"),
        (Modifier.IS_PROTECTED, "protected"),
        (Modifier.IS_PRIVATE, "private"),
        (Modifier.IS_STATIC, "static"),
        (Modifier.IS_READONLY, "readonly"),
    ):
        if modifiers & flag:
            names.append(name)
    return names


def format_value(value: PhpValue) -> str:
    """Render a PHP value in short var_export style."""
    match value:
        case None:
            return "null"
        case bool():
            return "true" if value else "false"
        case int():
            return str(value)
        case float():
            return float_to_string(value)
        case str():
            return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"
        case EnumCase():
            return str(value)
        case dict():
            items = ", ".join(f"{format_value(k)} => {format_value(v)}" for k, v in value.items())
            return f"[{items}]"
    raise TypeError(f"not a PHP value: {type(value).__name__}")


def format_signature(method: ReflectionMethod) -> str:
    """`(int $a = 1, string ...$rest): ?Foo` from declared source."""
    parameters = ", ".join(_format_parameter(p) for p in method.get_parameters())
    signature = f"({parameters})"
    return_type = method.get_return_type()
    if return_type is not None:
        signature += f": {return_type}"
    return signature


def _format_parameter(parameter: ReflectionParameter) -> str:
    parts = []
    declared = parameter.declaration.type
    if declared is not None:
        parts.append(str(declared))
    prefix = ("&" if parameter.is_passed_by_reference() else "") + (
        "..." if parameter.is_variadic() else ""
    )
    parts.append(f"{prefix}${parameter.name}")
    default = parameter.declaration.default
    if default is not None:
        parts.append(f"= {default.text}")
    return " ".join(parts)


class ConsoleReporter:
    """Console reporter: outputs a rich formatted class summary.

    Output is str, not print(). Caller decides destination.
    Values that fail to evaluate are shown with their error instead of
    aborting the report.
    """

    def __init__(self, config: ConsoleConfig | None = None) -> None:
        """Initialize reporter.

        Args:
            config: Reporter configuration. Uses defaults if None.
        """
        self._config = config or ConsoleConfig()

    def report(self, cls: ReflectionClass) -> str:
        """Format a reflected class as rich formatted string.

        Args:
            cls: Class to describe.

        Returns:
            Formatted string with tables of constants, properties and methods.

        Raises:
            ClassNotFoundError: If an ancestor cannot be located
            InheritanceCycleError: If the hierarchy is cyclic
        """
        output = StringIO()
        console = Console(
            file=output,
            force_terminal=self._config.color,
            no_color=not self._config.color,
            width=self._config.width,
        )

        self._render_header(console, cls)
        self._render_constants(console, cls)
        self._render_properties(console, cls)
        self._render_methods(console, cls)

        return output.getvalue()

    def _render_header(self, console: Console, cls: ReflectionClass) -> None:
        console.print()
        console.rule(Text(f"{_KIND_LABELS[cls.declaration.kind]} {cls.name}", style="bold"))
        console.print()

        modifiers = cls.get_modifiers()
        keywords = []
        if modifiers & ClassModifier.IS_EXPLICIT_ABSTRACT:
            keywords.append("abstract")
        if modifiers & ClassModifier.IS_FINAL:
            keywords.append("final")
        if modifiers & ClassModifier.IS_READONLY:
            keywords.append("readonly")

        lines = [f"File: {cls.file_name}:{cls.start_line}-{cls.end_line}"]
        if keywords:
            lines.append(f"Modifiers: {' '.join(keywords)}")
        if cls.get_parent_class_name():
            lines.append(f"Extends: {cls.get_parent_class_name()}")
        if cls.get_interface_names():
            lines.append(f"Implements: {', '.join(cls.get_interface_names())}")
        if cls.get_trait_names():
            lines.append(f"Uses: {', '.join(cls.get_trait_names())}")
        backing = cls.get_backing_type()
        if backing is not None:
            lines.append(f"Backed by: {backing}")

        for line in lines:
            console.print(Text(line))
        console.print()

    def _render_constants(self, console: Console, cls: ReflectionClass) -> None:
        constants = [
            c for c in cls.get_reflection_constants() if self._visible(cls, c.class_name)
        ]
        if not constants:
            return

        table = Table(title="Constants", title_justify="left", expand=False)
        table.add_column("Name")
        table.add_column("Modifiers")
        table.add_column("Value")
        table.add_column("Declared in")
        for constant in constants:
            if constant.is_enum_case():
                kind = "case"
            else:
                kind = " ".join(modifier_names(constant.get_modifiers()))
            value = self._value(constant.get_value) if self._config.show_values else Text("")
            table.add_row(Text(constant.name), Text(kind), value, Text(constant.class_name))
        console.print(table)

    def _render_properties(self, console: Console, cls: ReflectionClass) -> None:
        properties = [p for p in cls.get_properties() if self._visible(cls, p.class_name)]
        if not properties:
            return

        table = Table(title="Properties", title_justify="left", expand=False)
        table.add_column("Name")
        table.add_column("Modifiers")
        table.add_column("Type")
        table.add_column("Default")
        for prop in properties:
            declared = prop.get_type()
            if self._config.show_values and prop.has_default_value():
                default = self._value(prop.get_default_value)
            else:
                default = Text("")
            table.add_row(
                Text(f"${prop.name}"),
                Text(" ".join(modifier_names(prop.get_modifiers()))),
                Text(str(declared) if declared is not None else ""),
                default,
            )
        console.print(table)

    def _render_methods(self, console: Console, cls: ReflectionClass) -> None:
        methods = [m for m in cls.get_methods() if self._visible(cls, m.class_name)]
        if not methods:
            return

        table = Table(title="Methods", title_justify="left", expand=False)
        table.add_column("Name")
        table.add_column("Modifiers")
        table.add_column("Signature")
        table.add_column("Declared in")
        for method in methods:
            table.add_row(
                Text(method.name),
                Text(" ".join(modifier_names(method.get_modifiers()))),
                Text(format_signature(method)),
                Text(method.class_name),
            )
        console.print(table)

    def _visible(self, cls: ReflectionClass, declaring_class: str) -> bool:
        return self._config.show_inherited or declaring_class == cls.name

    def _value(self, evaluate: Callable[[], PhpValue]) -> Text:
        """Evaluate lazily; a failure is rendered instead of raised."""
        try:
            return Text(format_value(evaluate()))
        except PhpReflectError as e:
            return Text(f"<{type(e).__name__}: {e}>", style="red")
