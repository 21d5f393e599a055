"""PHP 8 value semantics for static evaluation.

Type juggling, arithmetic, comparison and string conversion rules of a
64-bit PHP 8 runtime, applied to Python representations of PHP values.

Operations raise plain Python exceptions where PHP throws:
TypeError for unsupported operand types, ZeroDivisionError for division
and modulo by zero, ArithmeticError for negative shifts and intdiv
overflow, ValueError for invalid arguments.
"""

from __future__ import annotations

import math
import re
from typing import TYPE_CHECKING

from phpreflect.domain.model.values import EnumCase

if TYPE_CHECKING:
    from phpreflect.domain.model.values import PhpValue

INT_MAX = 2**63 - 1
INT_MIN = -(2**63)
_UINT_RANGE = 2**64

# PHP's `precision` ini default, used by float to string conversion
FLOAT_PRECISION = 14

_WHITESPACE = " \t\n\r\v\f"
_NUMBER = r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?"
_NUMERIC_RE = re.compile(rf"[{_WHITESPACE}]*({_NUMBER})[{_WHITESPACE}]*\Z")
_LEADING_NUMERIC_RE = re.compile(rf"[{_WHITESPACE}]*({_NUMBER})")
_INTEGER_RE = re.compile(r"[+-]?\d+\Z")
_CANONICAL_INT_KEY_RE = re.compile(r"(?:0|-?[1-9]\d*)\Z")


# =============================================================================
# Types
# =============================================================================


def type_name(value: PhpValue) -> str:
    """PHP type name as used in error messages (get_debug_type)."""
    match value:
        case None:
            return "null"
        case bool():
            return "bool"
        case int():
            return "int"
        case float():
            return "float"
        case str():
            return "string"
        case dict():
            return "array"
        case EnumCase():
            return value.class_name
    raise TypeError(f"not a PHP value: {value!r}")


def normalize_int(value: int) -> int | float:
    """Integer result, overflowing to float outside the 64-bit range."""
    if INT_MIN <= value <= INT_MAX:
        return value
    return float(value)


def float_to_int(value: float) -> int:
    """Float to int conversion (zend_dval_to_lval).

    NaN and infinities become 0, out-of-range values wrap modulo 2**64.
    """
    if not math.isfinite(value):
        return 0
    if -(2.0**63) <= value < 2.0**63:
        return int(value)
    wrapped = math.fmod(value, float(_UINT_RANGE))
    if wrapped < 0:
        wrapped += _UINT_RANGE
    if wrapped > INT_MAX:
        wrapped -= _UINT_RANGE
    return int(wrapped)


# =============================================================================
# Numeric strings
# =============================================================================


def _number_from_text(text: str) -> int | float:
    """Integer if the text is an integer literal in range, float otherwise."""
    if _INTEGER_RE.match(text):
        number = int(text)
        if INT_MIN <= number <= INT_MAX:
            return number
    return float(text)


def parse_numeric(text: str) -> int | float | None:
    """Value of a numeric string, None if the string is not numeric.

    Leading and trailing whitespace is allowed, as in PHP 8.
    """
    match = _NUMERIC_RE.match(text)
    if match is None:
        return None
    return _number_from_text(match.group(1))


def parse_leading_numeric(text: str) -> int | float | None:
    """Value of the numeric prefix of a string ("12abc" -> 12), None if none."""
    match = _LEADING_NUMERIC_RE.match(text)
    if match is None:
        return None
    return _number_from_text(match.group(1))


# =============================================================================
# Conversions
# =============================================================================


def to_bool(value: PhpValue) -> bool:
    """Truthiness of a PHP value."""
    match value:
        case None:
            return False
        case bool():
            return value
        case int() | float():
            return value != 0
        case str():
            return value not in ("", "0")
        case dict():
            return bool(value)
    return True


def to_int(value: PhpValue) -> int:
    """`(int)` cast."""
    match value:
        case None:
            return 0
        case bool():
            return int(value)
        case int():
            return value
        case float():
            return float_to_int(value)
        case str():
            number = parse_leading_numeric(value)
            if number is None:
                return 0
            return number if isinstance(number, int) else float_to_int(number)
        case dict():
            return 1 if value else 0
    raise TypeError(f"Object of class {type_name(value)} could not be converted to int")


def to_float(value: PhpValue) -> float:
    """`(float)` cast."""
    match value:
        case None:
            return 0.0
        case bool() | int():
            return float(value)
        case float():
            return value
        case str():
            number = parse_leading_numeric(value)
            return 0.0 if number is None else float(number)
        case dict():
            return 1.0 if value else 0.0
    raise TypeError(f"Object of class {type_name(value)} could not be converted to float")


def float_to_string(value: float) -> str:
    """Format a float like PHP's string conversion (precision=14).

    Examples: 0.1 + 0.2 -> "0.3", 1e25 -> "1.0E+25", -0.0 -> "-0".
    """
    if math.isnan(value):
        return "NAN"
    if math.isinf(value):
        return "INF" if value > 0 else "-INF"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"

    sign = "-" if value < 0 else ""
    mantissa, _, exp_text = f"{abs(value):.{FLOAT_PRECISION - 1}e}".partition("e")
    digits = mantissa.replace(".", "").rstrip("0") or "0"
    exponent = int(exp_text)
    point = exponent + 1

    if point < -3 or point > FLOAT_PRECISION:
        fraction = digits[1:] or "0"
        exp_sign = "-" if exponent < 0 else "+"
        return f"{sign}{digits[0]}.{fraction}E{exp_sign}{abs(exponent)}"
    if point <= 0:
        return f"{sign}0.{'0' * -point}{digits}"
    if point >= len(digits):
        return f"{sign}{digits}{'0' * (point - len(digits))}"
    return f"{sign}{digits[:point]}.{digits[point:]}"


def to_string(value: PhpValue) -> str:
    """`(string)` cast."""
    match value:
        case None:
            return ""
        case bool():
            return "1" if value else ""
        case int():
            return str(value)
        case float():
            return float_to_string(value)
        case str():
            return value
        case dict():
            return "Array"
    raise TypeError(f"Object of class {type_name(value)} could not be converted to string")


def to_array(value: PhpValue) -> dict[int | str, PhpValue]:
    """`(array)` cast."""
    if value is None:
        return {}
    if isinstance(value, dict):
        return value
    if isinstance(value, EnumCase):
        raise TypeError(f"Cannot cast enum {value.class_name} to array")
    return {0: value}


def to_number(value: PhpValue, operator: str, other: PhpValue) -> int | float:
    """Operand conversion for arithmetic operators.

    Raises:
        TypeError: Arrays, objects and non-numeric strings
    """
    match value:
        case None:
            return 0
        case bool():
            return int(value)
        case int() | float():
            return value
        case str():
            number = parse_numeric(value)
            if number is None:
                number = parse_leading_numeric(value)
            if number is None:
                raise TypeError(
                    f"Unsupported operand types: string {operator} {type_name(other)}"
                )
            return number
    raise TypeError(f"Unsupported operand types: {type_name(value)} {operator} {type_name(other)}")


def to_integer_operand(value: PhpValue, operator: str, other: PhpValue) -> int:
    """Operand conversion for integer-only operators (%, <<, >>, bitwise)."""
    number = to_number(value, operator, other)
    return number if isinstance(number, int) else float_to_int(number)


# =============================================================================
# Arithmetic
# =============================================================================


def add(left: PhpValue, right: PhpValue) -> PhpValue:
    """`+`: numeric addition, or union for two arrays."""
    if isinstance(left, dict) and isinstance(right, dict):
        result = dict(left)
        for key, item in right.items():
            result.setdefault(key, item)
        return result
    a, b = to_number(left, "+", right), to_number(right, "+", left)
    if isinstance(a, int) and isinstance(b, int):
        return normalize_int(a + b)
    return float(a) + float(b)


def subtract(left: PhpValue, right: PhpValue) -> int | float:
    """`-`."""
    a, b = to_number(left, "-", right), to_number(right, "-", left)
    if isinstance(a, int) and isinstance(b, int):
        return normalize_int(a - b)
    return float(a) - float(b)


def multiply(left: PhpValue, right: PhpValue) -> int | float:
    """`*`."""
    a, b = to_number(left, "*", right), to_number(right, "*", left)
    if isinstance(a, int) and isinstance(b, int):
        return normalize_int(a * b)
    return float(a) * float(b)


def divide(left: PhpValue, right: PhpValue) -> int | float:
    """`/`: int when both operands are ints and the division is exact.

    Raises:
        ZeroDivisionError: Division by zero
    """
    a, b = to_number(left, "/", right), to_number(right, "/", left)
    if b == 0:
        raise ZeroDivisionError("Division by zero")
    if isinstance(a, int) and isinstance(b, int) and a % b == 0:
        return normalize_int(a // b)
    return float(a) / float(b)


def modulo(left: PhpValue, right: PhpValue) -> int:
    """`%`: integer remainder with the sign of the dividend.

    Raises:
        ZeroDivisionError: Modulo by zero
    """
    a, b = to_integer_operand(left, "%", right), to_integer_operand(right, "%", left)
    if b == 0:
        raise ZeroDivisionError("Modulo by zero")
    remainder = abs(a) % abs(b)
    return -remainder if a < 0 else remainder


def power(left: PhpValue, right: PhpValue) -> int | float:
    """`**`."""
    a, b = to_number(left, "**", right), to_number(right, "**", left)
    if isinstance(a, int) and isinstance(b, int) and b >= 0:
        # Cap the work: anything past 64 bits becomes a float anyway
        if abs(a) > 1 and b > 64:
            return _float_power(float(a), float(b))
        return normalize_int(a**b)
    return _float_power(float(a), float(b))


def _float_power(a: float, b: float) -> float:
    """Float exponentiation with C pow() edge cases."""
    try:
        result = a**b
    except ZeroDivisionError:
        return math.inf
    except OverflowError:
        return math.inf if a > 0 or float(b).is_integer() and b % 2 == 0 else -math.inf
    if isinstance(result, complex):
        return math.nan
    return result


def negate(value: PhpValue) -> int | float:
    """Unary `-` (compiled by PHP as multiplication by -1)."""
    return multiply(value, -1)


def identity(value: PhpValue) -> int | float:
    """Unary `+` (compiled by PHP as multiplication by 1)."""
    return multiply(value, 1)


# =============================================================================
# Bitwise
# =============================================================================


def _wrap64(value: int) -> int:
    """Two's complement wrap into the signed 64-bit range."""
    value &= _UINT_RANGE - 1
    return value - _UINT_RANGE if value > INT_MAX else value


def _bytes(value: str) -> bytes:
    return value.encode("utf-8", "surrogateescape")


def _text(value: bytes) -> str:
    return value.decode("utf-8", "surrogateescape")


def bitwise(operator: str, left: PhpValue, right: PhpValue) -> int | str:
    """`&`, `|`, `^` on integers, or bytewise on two strings."""
    if isinstance(left, str) and isinstance(right, str):
        a, b = _bytes(left), _bytes(right)
        match operator:
            case "&":
                return _text(bytes(x & y for x, y in zip(a, b)))
            case "^":
                return _text(bytes(x ^ y for x, y in zip(a, b)))
            case "|":
                longer = a if len(a) >= len(b) else b
                head = bytes(x | y for x, y in zip(a, b))
                return _text(head + longer[len(head) :])

    x = to_integer_operand(left, operator, right)
    y = to_integer_operand(right, operator, left)
    match operator:
        case "&":
            return x & y
        case "|":
            return x | y
        case "^":
            return x ^ y
    raise ValueError(f"unknown bitwise operator {operator}")


def bitwise_not(value: PhpValue) -> int | str:
    """Unary `~`."""
    match value:
        case bool() | None | dict() | EnumCase():
            raise TypeError(f"Cannot perform bitwise not on {type_name(value)}")
        case str():
            return _text(bytes(~byte & 0xFF for byte in _bytes(value)))
        case float():
            return ~float_to_int(value)
    return ~value


def shift_left(left: PhpValue, right: PhpValue) -> int:
    """`<<` with 64-bit wrap-around."""
    a, b = to_integer_operand(left, "<<", right), to_integer_operand(right, "<<", left)
    if b < 0:
        raise ArithmeticError("Bit shift by negative number")
    if b >= 64:
        return 0
    return _wrap64(a << b)


def shift_right(left: PhpValue, right: PhpValue) -> int:
    """`>>` (arithmetic shift)."""
    a, b = to_integer_operand(left, ">>", right), to_integer_operand(right, ">>", left)
    if b < 0:
        raise ArithmeticError("Bit shift by negative number")
    if b >= 64:
        return -1 if a < 0 else 0
    return a >> b


# =============================================================================
# Comparison
# =============================================================================


def _compare_numbers(a: int | float, b: int | float) -> int:
    if isinstance(a, int) and isinstance(b, int):
        return (a > b) - (a < b)
    x, y = float(a), float(b)
    if x == y:
        return 0
    return -1 if x < y else 1


def _compare_strings(a: str, b: str) -> int:
    """Two strings: numerically if both are numeric, else bytewise."""
    x, y = parse_numeric(a), parse_numeric(b)
    if x is not None and y is not None:
        return _compare_numbers(x, y)
    return (a > b) - (a < b)


def compare(left: PhpValue, right: PhpValue) -> int:
    """Loose three-way comparison (`<=>`) by PHP 8 rules.

    Returns:
        -1, 0 or 1. Uncomparable operands (NaN, different objects,
        arrays with different keys) return 1.
    """
    match left, right:
        case None, None:
            return 0
        case None, str():
            return 0 if right == "" else -1
        case str(), None:
            return 0 if left == "" else 1
        case (bool() | None, _) | (_, bool() | None):
            return int(to_bool(left)) - int(to_bool(right))
        case (int() | float(), int() | float()):
            return _compare_numbers(left, right)
        case str(), str():
            return _compare_strings(left, right)
        case (int() | float(), str()):
            number = parse_numeric(right)
            if number is None:
                return _compare_strings(to_string(left), right)
            return _compare_numbers(left, number)
        case (str(), int() | float()):
            return -compare(right, left)
        case dict(), dict():
            return _compare_arrays(left, right)
        case dict(), _:
            return 1
        case _, dict():
            return -1
        case EnumCase(), EnumCase():
            return 0 if left == right else 1
    # Object against scalar
    return 1


def _compare_arrays(left: dict[int | str, PhpValue], right: dict[int | str, PhpValue]) -> int:
    if len(left) != len(right):
        return -1 if len(left) < len(right) else 1
    for key, item in left.items():
        if key not in right:
            return 1
        result = compare(item, right[key])
        if result != 0:
            return result
    return 0


def loose_equals(left: PhpValue, right: PhpValue) -> bool:
    """`==`."""
    return compare(left, right) == 0


def less_than(left: PhpValue, right: PhpValue) -> bool:
    """`<`. `a > b` is evaluated as `b < a`."""
    return compare(left, right) < 0


def less_or_equal(left: PhpValue, right: PhpValue) -> bool:
    """`<=`. `a >= b` is evaluated as `b <= a`."""
    return compare(left, right) <= 0


def identical(left: PhpValue, right: PhpValue) -> bool:
    """`===`: same type and value; arrays also in the same order."""
    if type(left) is not type(right):
        return False
    if isinstance(left, dict) and isinstance(right, dict):
        if list(left.keys()) != list(right.keys()):
            return False
        return all(identical(left[key], right[key]) for key in left)
    return left == right


# =============================================================================
# Arrays and strings
# =============================================================================


def normalize_key(key: PhpValue) -> int | str:
    """Array key normalization.

    Canonical decimal strings become ints, bools and floats become ints,
    null becomes "".

    Raises:
        TypeError: Arrays and objects cannot be keys
    """
    match key:
        case None:
            return ""
        case bool():
            return int(key)
        case int():
            return key
        case float():
            return float_to_int(key)
        case str():
            if _CANONICAL_INT_KEY_RE.match(key):
                number = int(key)
                if INT_MIN <= number <= INT_MAX:
                    return number
            return key
    raise TypeError(f"Illegal offset type: {type_name(key)}")


def next_index(array: dict[int | str, PhpValue]) -> int:
    """Key used by `$a[] = ...`: one past the largest int key, 0 without int keys."""
    int_keys = [key for key in array if isinstance(key, int)]
    if not int_keys:
        return 0
    return max(int_keys) + 1


def concat(left: PhpValue, right: PhpValue) -> str:
    """`.`."""
    return to_string(left) + to_string(right)


def string_offset(value: str, offset: PhpValue) -> str:
    """`$string[$offset]`, negative offsets count from the end.

    Raises:
        TypeError: Non-numeric offset
    """
    if isinstance(offset, str):
        number = parse_numeric(offset)
        if not isinstance(number, int):
            raise TypeError(f'Cannot access offset of type string "{offset}" on string')
        index = number
    elif isinstance(offset, int | float | bool) or offset is None:
        index = to_int(offset)
    else:
        raise TypeError(f"Cannot access offset of type {type_name(offset)} on string")

    data = _bytes(value)
    if index < 0:
        index += len(data)
    if not 0 <= index < len(data):
        return ""
    return _text(data[index : index + 1])


def fetch(container: PhpValue, offset: PhpValue) -> PhpValue:
    """Read `$container[$offset]`. Missing keys and scalar containers read as null."""
    match container:
        case dict():
            return container.get(normalize_key(offset))
        case str():
            return string_offset(container, offset)
        case EnumCase():
            raise TypeError(f"Cannot use object of type {container.class_name} as array")
    return None


def byte_length(value: str) -> int:
    """strlen()."""
    return len(_bytes(value))
