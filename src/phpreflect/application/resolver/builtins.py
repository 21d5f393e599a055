"""Builtin constants and pure functions known to the resolver."""

from __future__ import annotations

import math
import sys
from types import MappingProxyType
from typing import TYPE_CHECKING

from phpreflect.application.resolver import php_semantics as php

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from phpreflect.domain.model.values import PhpValue

COUNT_RECURSIVE = 1

BUILTIN_CONSTANTS: Mapping[str, PhpValue] = MappingProxyType(
    {
        # Core
        "PHP_EOL": "\n",
        "PHP_INT_MAX": php.INT_MAX,
        "PHP_INT_MIN": php.INT_MIN,
        "PHP_INT_SIZE": 8,
        "PHP_FLOAT_EPSILON": sys.float_info.epsilon,
        "PHP_FLOAT_MAX": sys.float_info.max,
        "PHP_FLOAT_MIN": sys.float_info.min,
        "PHP_FLOAT_DIG": 15,
        "PHP_OS": "Linux",
        "PHP_OS_FAMILY": "Linux",
        "PHP_MAXPATHLEN": 4096,
        "DIRECTORY_SEPARATOR": "/",
        "PATH_SEPARATOR": ":",
        "NAN": math.nan,
        "INF": math.inf,
        # Math
        "M_PI": math.pi,
        "M_E": math.e,
        "M_LOG2E": 1.4426950408889634,
        "M_LOG10E": 0.4342944819032518,
        "M_LN2": 0.6931471805599453,
        "M_LN10": 2.302585092994046,
        "M_PI_2": math.pi / 2,
        "M_PI_4": math.pi / 4,
        "M_1_PI": 1 / math.pi,
        "M_2_PI": 2 / math.pi,
        "M_SQRTPI": 1.772453850905516,
        "M_2_SQRTPI": 1.1283791670955126,
        "M_SQRT2": math.sqrt(2),
        "M_SQRT3": math.sqrt(3),
        "M_SQRT1_2": 0.7071067811865476,
        "M_LNPI": 1.1447298858494002,
        "M_EULER": 0.5772156649015329,
        "PHP_ROUND_HALF_UP": 1,
        "PHP_ROUND_HALF_DOWN": 2,
        "PHP_ROUND_HALF_EVEN": 3,
        "PHP_ROUND_HALF_ODD": 4,
        # Error levels
        "E_ERROR": 1,
        "E_WARNING": 2,
        "E_PARSE": 4,
        "E_NOTICE": 8,
        "E_CORE_ERROR": 16,
        "E_CORE_WARNING": 32,
        "E_COMPILE_ERROR": 64,
        "E_COMPILE_WARNING": 128,
        "E_USER_ERROR": 256,
        "E_USER_WARNING": 512,
        "E_USER_NOTICE": 1024,
        "E_STRICT": 2048,
        "E_RECOVERABLE_ERROR": 4096,
        "E_DEPRECATED": 8192,
        "E_USER_DEPRECATED": 16384,
        "E_ALL": 32767,
        # Arrays
        "COUNT_NORMAL": 0,
        "COUNT_RECURSIVE": COUNT_RECURSIVE,
        "SORT_REGULAR": 0,
        "SORT_NUMERIC": 1,
        "SORT_STRING": 2,
        "SORT_LOCALE_STRING": 5,
        "SORT_NATURAL": 6,
        "SORT_FLAG_CASE": 8,
        "SORT_ASC": 4,
        "SORT_DESC": 3,
        # Strings
        "STR_PAD_LEFT": 0,
        "STR_PAD_RIGHT": 1,
        "STR_PAD_BOTH": 2,
        "ENT_COMPAT": 2,
        "ENT_QUOTES": 3,
        "ENT_NOQUOTES": 0,
        "ENT_SUBSTITUTE": 8,
        "ENT_HTML401": 0,
        "ENT_HTML5": 48,
        "PREG_PATTERN_ORDER": 1,
        "PREG_SET_ORDER": 2,
        "PREG_SPLIT_NO_EMPTY": 1,
        # JSON
        "JSON_HEX_TAG": 1,
        "JSON_HEX_AMP": 2,
        "JSON_HEX_APOS": 4,
        "JSON_HEX_QUOT": 8,
        "JSON_FORCE_OBJECT": 16,
        "JSON_NUMERIC_CHECK": 32,
        "JSON_UNESCAPED_SLASHES": 64,
        "JSON_PRETTY_PRINT": 128,
        "JSON_UNESCAPED_UNICODE": 256,
        "JSON_PARTIAL_OUTPUT_ON_ERROR": 512,
        "JSON_PRESERVE_ZERO_FRACTION": 1024,
        "JSON_UNESCAPED_LINE_TERMINATORS": 2048,
        "JSON_OBJECT_AS_ARRAY": 1,
        "JSON_BIGINT_AS_STRING": 2,
        "JSON_INVALID_UTF8_IGNORE": 1048576,
        "JSON_INVALID_UTF8_SUBSTITUTE": 2097152,
        "JSON_THROW_ON_ERROR": 4194304,
    }
)


# =============================================================================
# Functions
# =============================================================================


def _dirname_once(path: str) -> str:
    """One level of PHP's dirname() on a `/` separated path."""
    if not path:
        return ""
    end = len(path) - 1
    while end >= 0 and path[end] == "/":
        end -= 1
    if end < 0:
        return "/"
    while end >= 0 and path[end] != "/":
        end -= 1
    if end < 0:
        return "."
    while end >= 0 and path[end] == "/":
        end -= 1
    if end < 0:
        return "/"
    return path[: end + 1]


def php_dirname(path: PhpValue, levels: PhpValue = 1) -> str:
    """dirname()."""
    result = php.to_string(path)
    count = php.to_int(levels)
    if count < 1:
        raise ValueError("dirname(): Argument #2 ($levels) must be greater than or equal to 1")
    for _ in range(count):
        parent = _dirname_once(result)
        if parent == result:
            break
        result = parent
    return result


def php_basename(path: PhpValue, suffix: PhpValue = "") -> str:
    """basename()."""
    text = php.to_string(path).rstrip("/")
    if not text:
        return ""
    base = text.rpartition("/")[2]
    ending = php.to_string(suffix)
    if ending and base.endswith(ending) and base != ending:
        base = base[: -len(ending)]
    return base


def php_implode(separator: PhpValue, array: PhpValue = None) -> str:
    """implode()/join() with `(separator, array)` or `(array)` arguments."""
    if array is None:
        if not isinstance(separator, dict):
            raise TypeError("implode(): Argument #1 ($array) must be of type array")
        separator, array = "", separator
    if not isinstance(array, dict):
        raise TypeError("implode(): Argument #2 ($array) must be of type ?array")
    glue = php.to_string(separator)
    return glue.join(php.to_string(item) for item in array.values())


_UPPER = str.maketrans("abcdefghijklmnopqrstuvwxyz", "ABCDEFGHIJKLMNOPQRSTUVWXYZ")
_LOWER = str.maketrans("ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz")


def php_strtolower(value: PhpValue) -> str:
    """strtolower(), ASCII only as in PHP 8.2+."""
    return php.to_string(value).translate(_LOWER)


def php_strtoupper(value: PhpValue) -> str:
    """strtoupper(), ASCII only as in PHP 8.2+."""
    return php.to_string(value).translate(_UPPER)


def php_ucfirst(value: PhpValue) -> str:
    """ucfirst()."""
    text = php.to_string(value)
    return text[:1].translate(_UPPER) + text[1:]


def php_lcfirst(value: PhpValue) -> str:
    """lcfirst()."""
    text = php.to_string(value)
    return text[:1].translate(_LOWER) + text[1:]


def php_str_repeat(value: PhpValue, times: PhpValue) -> str:
    """str_repeat()."""
    count = php.to_int(times)
    if count < 0:
        raise ValueError("str_repeat(): Argument #2 ($times) must be greater than or equal to 0")
    return php.to_string(value) * count


def php_strlen(value: PhpValue) -> int:
    """strlen(), in bytes."""
    return php.byte_length(php.to_string(value))


def php_abs(value: PhpValue) -> int | float:
    """abs()."""
    number = php.to_number(value, "abs", None)
    if isinstance(number, int):
        return php.normalize_int(abs(number))
    return abs(number)


def _extremum_arguments(name: str, values: tuple[PhpValue, ...]) -> list[PhpValue]:
    if len(values) == 1:
        (array,) = values
        if not isinstance(array, dict):
            raise TypeError(f"{name}(): Argument #1 ($value) must be of type array")
        if not array:
            raise ValueError(f"{name}(): Argument #1 ($value) must contain at least one element")
        return list(array.values())
    if not values:
        raise TypeError(f"{name}() expects at least 1 argument, 0 given")
    return list(values)


def php_max(*values: PhpValue) -> PhpValue:
    """max(): first of the largest values."""
    candidates = _extremum_arguments("max", values)
    best = candidates[0]
    for item in candidates[1:]:
        if php.compare(item, best) > 0:
            best = item
    return best


def php_min(*values: PhpValue) -> PhpValue:
    """min(): first of the smallest values."""
    candidates = _extremum_arguments("min", values)
    best = candidates[0]
    for item in candidates[1:]:
        if php.compare(item, best) < 0:
            best = item
    return best


def php_intdiv(left: PhpValue, right: PhpValue) -> int:
    """intdiv(): integer division truncating toward zero."""
    a = php.to_integer_operand(left, "intdiv", right)
    b = php.to_integer_operand(right, "intdiv", left)
    if b == 0:
        raise ZeroDivisionError("Division by zero")
    if a == php.INT_MIN and b == -1:
        raise ArithmeticError("Division of PHP_INT_MIN by -1 is not an integer")
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def php_count(value: PhpValue, mode: PhpValue = 0) -> int:
    """count()."""
    if not isinstance(value, dict):
        raise TypeError(
            f"count(): Argument #1 ($value) must be of type Countable|array, "
            f"{php.type_name(value)} given"
        )
    total = len(value)
    if php.to_int(mode) == COUNT_RECURSIVE:
        total += sum(php_count(item, mode) for item in value.values() if isinstance(item, dict))
    return total


BUILTIN_FUNCTIONS: Mapping[str, Callable[..., PhpValue]] = MappingProxyType(
    {
        "dirname": php_dirname,
        "basename": php_basename,
        "implode": php_implode,
        "join": php_implode,
        "strtolower": php_strtolower,
        "strtoupper": php_strtoupper,
        "ucfirst": php_ucfirst,
        "lcfirst": php_lcfirst,
        "str_repeat": php_str_repeat,
        "strlen": php_strlen,
        "abs": php_abs,
        "max": php_max,
        "min": php_min,
        "intdiv": php_intdiv,
        "count": php_count,
    }
)
