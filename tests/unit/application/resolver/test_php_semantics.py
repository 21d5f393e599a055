"""Tests for application/resolver/php_semantics.py."""

import math

import pytest

from phpreflect.application.resolver import php_semantics as php
from phpreflect.domain.model.values import EnumCase


class TestNumericStrings:
    """Tests for numeric string parsing."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [("42", 42), (" 42 ", 42), ("-7", -7), ("1.5", 1.5), ("1e3", 1000.0), (".5", 0.5)],
    )
    def test_numeric(self, text: str, expected: float) -> None:
        assert php.parse_numeric(text) == expected

    @pytest.mark.parametrize("text", ["", "abc", "12abc", "1.2.3", "0x1A"])
    def test_not_numeric(self, text: str) -> None:
        assert php.parse_numeric(text) is None

    def test_leading_numeric(self) -> None:
        assert php.parse_leading_numeric("12abc") == 12
        assert php.parse_leading_numeric("abc") is None

    def test_out_of_range_integer_string_is_float(self) -> None:
        assert php.parse_numeric("9223372036854775808") == 9.223372036854775808e18


class TestConversions:
    """Tests for PHP casts."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(None, False), (0, False), ("0", False), ("", False), ({}, False), ("0.0", True),
         ({0: 1}, True), (0.1, True)],
    )
    def test_to_bool(self, value: object, expected: bool) -> None:
        assert php.to_bool(value) is expected  # type: ignore[arg-type]

    def test_to_int(self) -> None:
        assert php.to_int("12abc") == 12
        assert php.to_int(3.99) == 3
        assert php.to_int(-3.99) == -3
        assert php.to_int(True) == 1
        assert php.to_int(None) == 0
        assert php.to_int(math.nan) == 0

    def test_float_to_int_wraps(self) -> None:
        assert php.float_to_int(2.0**64 + 4096.0) == 4096
        assert php.float_to_int(2.0**63) == php.INT_MIN

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(0.1 + 0.2, "0.3"), (1.0, "1"), (-0.0, "-0"), (1e25, "1.0E+25"), (1.5e-7, "1.5E-7"),
         (0.0001, "0.0001"), (1234567890123456.0, "1.2345678901235E+15"), (math.inf, "INF"),
         (-math.inf, "-INF"), (math.nan, "NAN"), (100.0, "100"), (-2.5, "-2.5")],
    )
    def test_float_to_string(self, value: float, expected: str) -> None:
        assert php.float_to_string(value) == expected

    def test_to_string(self) -> None:
        assert php.to_string(True) == "1"
        assert php.to_string(False) == ""
        assert php.to_string(None) == ""
        assert php.to_string({1: 2}) == "Array"

    def test_enum_to_string_fails(self) -> None:
        with pytest.raises(TypeError, match="could not be converted to string"):
            php.to_string(EnumCase("Suit", "Hearts"))

    def test_to_array(self) -> None:
        assert php.to_array(None) == {}
        assert php.to_array("a") == {0: "a"}


class TestArithmetic:
    """Tests for arithmetic operators."""

    def test_int_overflow_becomes_float(self) -> None:
        result = php.add(php.INT_MAX, 1)
        assert isinstance(result, float)
        assert result == 9.223372036854775808e18

    def test_numeric_string_operand(self) -> None:
        assert php.add("5", 3) == 8
        assert php.multiply("1.5", 2) == 3.0

    def test_non_numeric_string_fails(self) -> None:
        with pytest.raises(TypeError, match="Unsupported operand types"):
            php.add("abc", 1)

    def test_array_union(self) -> None:
        assert php.add({0: "a", 1: "b"}, {1: "x", 2: "c"}) == {0: "a", 1: "b", 2: "c"}

    def test_array_plus_int_fails(self) -> None:
        with pytest.raises(TypeError):
            php.add({0: 1}, 1)

    def test_exact_division_stays_int(self) -> None:
        assert php.divide(6, 3) == 2
        assert isinstance(php.divide(6, 3), int)
        assert php.divide(7, 2) == 3.5

    def test_division_by_zero(self) -> None:
        with pytest.raises(ZeroDivisionError):
            php.divide(1, 0)

    def test_modulo_sign_follows_dividend(self) -> None:
        assert php.modulo(-7, 3) == -1
        assert php.modulo(7, -3) == 1

    def test_modulo_by_zero(self) -> None:
        with pytest.raises(ZeroDivisionError, match="Modulo"):
            php.modulo(1, 0)

    def test_power(self) -> None:
        assert php.power(2, 10) == 1024
        assert php.power(2, -1) == 0.5
        assert php.power(2, 64) == 1.8446744073709552e19

    def test_negate(self) -> None:
        assert php.negate("3") == -3
        assert php.identity("2.5") == 2.5


class TestBitwise:
    """Tests for bitwise operators."""

    def test_integers(self) -> None:
        assert php.bitwise("&", 6, 3) == 2
        assert php.bitwise("|", 6, 3) == 7
        assert php.bitwise("^", 6, 3) == 5

    def test_strings_are_bytewise(self) -> None:
        assert php.bitwise("|", "a", " ") == "a"
        assert php.bitwise("&", "ab", "a") == "a"

    def test_shift(self) -> None:
        assert php.shift_left(1, 3) == 8
        assert php.shift_left(1, 63) == php.INT_MIN
        assert php.shift_left(1, 64) == 0
        assert php.shift_right(-8, 1) == -4
        assert php.shift_right(-1, 70) == -1

    def test_negative_shift(self) -> None:
        with pytest.raises(ArithmeticError, match="negative"):
            php.shift_left(1, -1)

    def test_not(self) -> None:
        assert php.bitwise_not(0) == -1
        with pytest.raises(TypeError):
            php.bitwise_not(True)


class TestComparison:
    """Tests for PHP 8 comparison rules."""

    @pytest.mark.parametrize(
        ("left", "right"),
        [(0, "0"), ("1", "01"), ("10", "1e1"), (100, "1e2"), (None, False), (None, ""),
         ("abc", "abc"), ({0: 1}, {0: 1}), (1, 1.0)],
    )
    def test_loosely_equal(self, left: object, right: object) -> None:
        assert php.loose_equals(left, right)  # type: ignore[arg-type]

    @pytest.mark.parametrize(
        ("left", "right"),
        [(0, "a"), ("1", "1a"), ("abc", 0), (None, "a"), ({0: 1}, {1: 1})],
    )
    def test_not_loosely_equal(self, left: object, right: object) -> None:
        assert not php.loose_equals(left, right)  # type: ignore[arg-type]

    def test_spaceship(self) -> None:
        assert php.compare(1, 2) == -1
        assert php.compare("b", "a") == 1
        assert php.compare({0: 1}, {0: 1, 1: 2}) == -1

    def test_nan_is_unordered(self) -> None:
        assert not php.loose_equals(math.nan, math.nan)

    def test_bool_comparison(self) -> None:
        assert php.loose_equals("abc", True)
        assert php.less_than(False, True)

    def test_identical(self) -> None:
        assert php.identical(1, 1)
        assert not php.identical(1, 1.0)
        assert not php.identical({0: 1, 1: 2}, {1: 2, 0: 1})
        assert php.identical({"a": 1}, {"a": 1})
        assert php.identical({0: {"a": 1}}, {0: {"a": 1}})
        assert not php.identical({0: {"a": 1}}, {0: {"a": "1"}})

    def test_int_float_compared_as_floats(self) -> None:
        assert php.loose_equals(php.INT_MAX, float(php.INT_MAX))


class TestArrays:
    """Tests for array keys and offsets."""

    @pytest.mark.parametrize(
        ("key", "expected"),
        [("1", 1), ("01", "01"), ("-5", -5), ("-0", "-0"), (True, 1), (1.7, 1), (None, ""),
         ("a", "a")],
    )
    def test_normalize_key(self, key: object, expected: object) -> None:
        assert php.normalize_key(key) == expected  # type: ignore[arg-type]

    def test_array_key_fails(self) -> None:
        with pytest.raises(TypeError, match="Illegal offset type"):
            php.normalize_key({})

    def test_next_index(self) -> None:
        assert php.next_index({}) == 0
        assert php.next_index({5: "a", "x": 1}) == 6
        assert php.next_index({-5: "a"}) == -4

    def test_fetch(self) -> None:
        assert php.fetch({1: "a"}, "1") == "a"
        assert php.fetch({1: "a"}, 2) is None
        assert php.fetch(None, 0) is None

    def test_string_offset(self) -> None:
        assert php.fetch("hello", 1) == "e"
        assert php.fetch("hello", -1) == "o"
        assert php.fetch("hello", 10) == ""

    def test_concat(self) -> None:
        assert php.concat("a", 1.0) == "a1"
        assert php.concat(None, True) == "1"

    def test_byte_length(self) -> None:
        assert php.byte_length("é") == 2
