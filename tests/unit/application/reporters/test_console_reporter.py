"""Tests for ConsoleReporter.

Tests:
- ConsoleConfig default values and customization
- ConsoleReporter report() output format
- Inherited member filtering
- Rendering of values that fail to evaluate
- Value, signature and modifier formatting helpers
"""

import pytest

from phpreflect.application.reporters.console import (
    ConsoleConfig,
    ConsoleReporter,
    format_signature,
    format_value,
    modifier_names,
)
from phpreflect.domain.model.enums import Modifier
from phpreflect.domain.model.values import EnumCase
from tests.factories import reflect_class

CODE = """<?php
namespace App;
abstract class Base {
    const VERSION = '1.0';
    protected ?int $limit = 10;
    public function inherited(): void {}
    abstract protected function hook(&$out);
}
final class Service extends Base {
    const BAD = time();
    private static array $cache = [];
    public function run(int $a = 1, string ...$rest): ?int {}
}
"""

PLAIN = ConsoleConfig(color=False, width=200)


class TestConsoleConfig:
    """Tests for ConsoleConfig."""

    def test_default_values(self) -> None:
        """Default values are set correctly."""
        config = ConsoleConfig()
        assert config.show_inherited is True
        assert config.show_values is True
        assert config.color is True
        assert config.width == 120

    def test_custom_values(self) -> None:
        """Custom values can be set."""
        config = ConsoleConfig(show_inherited=False, show_values=False, color=False, width=80)
        assert config.show_inherited is False
        assert config.show_values is False
        assert config.color is False
        assert config.width == 80


class TestConsoleReporter:
    """Tests for ConsoleReporter."""

    def test_report_contains_header(self) -> None:
        """Report starts with kind and class name."""
        output = ConsoleReporter(PLAIN).report(reflect_class(CODE, "App\\Service"))
        assert "class App\\Service" in output
        assert "Modifiers: final" in output
        assert "Extends: App\\Base" in output

    def test_report_contains_tables(self) -> None:
        """Constants, properties and methods are tabulated."""
        output = ConsoleReporter(PLAIN).report(reflect_class(CODE, "App\\Service"))
        assert "Constants" in output
        assert "Properties" in output
        assert "Methods" in output
        assert "'1.0'" in output
        assert "$cache" in output
        assert "private static" in output

    def test_failed_value_is_rendered(self) -> None:
        """Constants that cannot be evaluated do not abort the report."""
        output = ConsoleReporter(PLAIN).report(reflect_class(CODE, "App\\Service"))
        assert "<UnresolvableConstantExpression:" in output

    def test_hide_inherited(self) -> None:
        """show_inherited=False keeps only own members."""
        config = ConsoleConfig(show_inherited=False, color=False, width=200)
        output = ConsoleReporter(config).report(reflect_class(CODE, "App\\Service"))
        assert "run" in output
        assert "inherited" not in output
        assert "VERSION" not in output

    def test_hide_values(self) -> None:
        """show_values=False skips evaluation entirely."""
        config = ConsoleConfig(show_values=False, color=False, width=200)
        output = ConsoleReporter(config).report(reflect_class(CODE, "App\\Service"))
        assert "UnresolvableConstantExpression" not in output
        assert "'1.0'" not in output

    def test_abstract_class_header(self) -> None:
        """Explicitly abstract classes list the keyword."""
        output = ConsoleReporter(PLAIN).report(reflect_class(CODE, "App\\Base"))
        assert "Modifiers: abstract" in output
        assert "Extends:" not in output

    def test_enum_header(self) -> None:
        """Enums show kind and backing type."""
        enum = reflect_class(
            "<?php\nenum Status: int { case On = 1; case Off = 0; }\n", "Status"
        )
        output = ConsoleReporter(PLAIN).report(enum)
        assert "enum Status" in output
        assert "Backed by: int" in output
        assert "case" in output

    def test_report_returns_str(self) -> None:
        """Report returns string, not printed."""
        output = ConsoleReporter().report(reflect_class(CODE, "App\\Base"))
        assert isinstance(output, str)
        assert output


class TestFormatValue:
    """Tests for format_value()."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, "null"),
            (True, "true"),
            (False, "false"),
            (42, "42"),
            (1.5, "1.5"),
            (1.0, "1"),
            ("it's", "'it\\'s'"),
            ("a\\b", "'a\\\\b'"),
            ({0: 1, "k": "v"}, "[0 => 1, 'k' => 'v']"),
            ({}, "[]"),
            (EnumCase("App\\Suit", "Hearts"), "App\\Suit::Hearts"),
        ],
    )
    def test_values(self, value: object, expected: str) -> None:
        """PHP values render in short var_export style."""
        assert format_value(value) == expected

    def test_non_php_value(self) -> None:
        """Python objects outside the value model are rejected."""
        with pytest.raises(TypeError, match="not a PHP value"):
            format_value(object())


class TestFormatSignature:
    """Tests for format_signature()."""

    def test_typed_signature(self) -> None:
        """Types, defaults, variadics and return type are shown."""
        method = reflect_class(CODE, "App\\Service").get_method("run")
        assert format_signature(method) == "(int $a = 1, string ...$rest): ?int"

    def test_by_reference_without_return(self) -> None:
        method = reflect_class(CODE, "App\\Service").get_method("hook")
        assert format_signature(method) == "(&$out)"


class TestModifierNames:
    """Tests for modifier_names()."""

    def test_order(self) -> None:
        """Keywords follow PHP's declaration order."""
        flags = Modifier.IS_STATIC | Modifier.IS_FINAL | Modifier.IS_PROTECTED
        assert modifier_names(flags) == ["final", "protected", "static"]

    def test_abstract_public(self) -> None:
        assert modifier_names(Modifier.IS_ABSTRACT | Modifier.IS_PUBLIC) == ["abstract", "public"]

    def test_empty(self) -> None:
        assert modifier_names(0) == []
