"""Decoding of PHP literal tokens."""

from __future__ import annotations

import re

from phpreflect.application.resolver.php_semantics import INT_MAX

_SINGLE_QUOTED_ESCAPE = re.compile(r"\\([\\'])")
_DOUBLE_QUOTED_ESCAPE = re.compile(
    r"\\(?:([nrtvef\\$\"])|([0-7]{1,3})|x([0-9A-Fa-f]{1,2})|u\{([0-9A-Fa-f]+)\})"
)
_SIMPLE_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "e": "\x1b",
    "f": "\f",
    "\\": "\\",
    "$": "$",
}


def parse_integer(text: str) -> int | float:
    """Value of an integer literal (decimal, hex, octal, binary, `_` separated).

    Literals beyond PHP_INT_MAX become floats.

    Raises:
        ValueError: Malformed literal (e.g. `09`)
    """
    digits = text.replace("_", "").lower()
    if digits.startswith("0x"):
        value = int(digits[2:], 16)
    elif digits.startswith("0b"):
        value = int(digits[2:], 2)
    elif digits.startswith("0o"):
        value = int(digits[2:], 8)
    elif len(digits) > 1 and digits.startswith("0"):
        value = int(digits[1:], 8)
    else:
        value = int(digits, 10)
    return value if value <= INT_MAX else float(value)


def parse_float(text: str) -> float:
    """Value of a float literal."""
    return float(text.replace("_", ""))


def _strip_binary_prefix(text: str) -> str:
    return text[1:] if text[:1] in ("b", "B") else text


def unescape_single_quoted(body: str) -> str:
    """Apply single-quoted escapes: only `\\\\` and `\\'`."""
    return _SINGLE_QUOTED_ESCAPE.sub(r"\1", body)


def unescape_double_quoted(body: str, quote: str | None = '"') -> str:
    """Apply double-quoted/heredoc escape sequences.

    Args:
        body: String contents without delimiters
        quote: Delimiter whose escape is honored, None for heredoc

    Raises:
        ValueError: Invalid `\\u{...}` code point
    """

    def replace(match: re.Match[str]) -> str:
        simple, octal, hexa, codepoint = match.groups()
        if simple is not None:
            if simple == '"':
                return '"' if quote == '"' else match.group(0)
            return _SIMPLE_ESCAPES[simple]
        if octal is not None:
            return _byte(int(octal, 8) & 0xFF)
        if hexa is not None:
            return _byte(int(hexa, 16))
        value = int(codepoint, 16)
        if value > 0x10FFFF:
            raise ValueError("Invalid UTF-8 codepoint escape sequence: Codepoint too large")
        return chr(value)

    decoded = _DOUBLE_QUOTED_ESCAPE.sub(replace, body)
    # Byte escapes may combine into multi-byte characters
    return decoded.encode("utf-8", "surrogateescape").decode("utf-8", "surrogateescape")


def _byte(value: int) -> str:
    return bytes([value]).decode("utf-8", "surrogateescape")


def decode_quoted_string(text: str) -> str:
    """Value of a single- or double-quoted string literal without interpolation."""
    literal = _strip_binary_prefix(text)
    if len(literal) < 2 or literal[0] != literal[-1] or literal[0] not in "'\"":
        raise ValueError(f"not a quoted string literal: {text}")
    body = literal[1:-1]
    if literal[0] == "'":
        return unescape_single_quoted(body)
    return unescape_double_quoted(body)


def decode_heredoc(text: str) -> str:
    """Value of a heredoc or nowdoc literal without interpolation.

    The indentation of the closing marker is removed from every body line.
    """
    lines = _strip_binary_prefix(text).replace("\r\n", "\n").split("\n")
    if len(lines) < 2 or not lines[0].startswith("<<<"):
        raise ValueError(f"not a heredoc literal: {text[:20]}")

    label = lines[0][3:].strip(" \t")
    is_nowdoc = label.startswith("'")

    closing = lines[-1]
    indentation = len(closing) - len(closing.lstrip(" \t"))
    body_lines = []
    for line in lines[1:-1]:
        prefix = len(line) - len(line.lstrip(" \t"))
        body_lines.append(line[min(prefix, indentation) :])
    body = "\n".join(body_lines)

    if is_nowdoc:
        return body
    return unescape_double_quoted(body, quote=None)
