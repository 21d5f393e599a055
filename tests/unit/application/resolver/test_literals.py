"""Tests for application/resolver/literals.py."""

import pytest

from phpreflect.application.resolver.literals import (
    decode_heredoc,
    decode_quoted_string,
    parse_float,
    parse_integer,
    unescape_single_quoted,
)


class TestIntegers:
    """Tests for integer literal decoding."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [("42", 42), ("0x1A", 26), ("0X1a", 26), ("0b101", 5), ("017", 15), ("0o17", 15),
         ("1_000_000", 1000000), ("0", 0)],
    )
    def test_bases(self, text: str, expected: int) -> None:
        assert parse_integer(text) == expected

    def test_overflow_becomes_float(self) -> None:
        value = parse_integer("9223372036854775808")
        assert isinstance(value, float)

    def test_malformed_octal(self) -> None:
        with pytest.raises(ValueError):
            parse_integer("09")

    def test_float(self) -> None:
        assert parse_float("1_000.5") == 1000.5
        assert parse_float("1e3") == 1000.0


class TestQuotedStrings:
    """Tests for quoted string decoding."""

    def test_single_quoted_keeps_most_escapes(self) -> None:
        assert unescape_single_quoted(r"a\'b\\c\n") == "a'b\\c\\n"

    def test_single_quoted_literal(self) -> None:
        assert decode_quoted_string("'it\\'s'") == "it's"

    def test_double_quoted_escapes(self) -> None:
        assert decode_quoted_string('"a\\tb\\n"') == "a\tb\n"
        assert decode_quoted_string('"\\$x \\""') == '$x "'

    def test_numeric_escapes(self) -> None:
        assert decode_quoted_string('"\\x41\\101"') == "AA"
        assert decode_quoted_string('"\\u{1F600}"') == "\U0001f600"

    def test_byte_escapes_form_utf8(self) -> None:
        assert decode_quoted_string('"\\xc3\\xa9"') == "é"

    def test_unknown_escape_is_kept(self) -> None:
        assert decode_quoted_string('"\\q"') == "\\q"

    def test_binary_prefix(self) -> None:
        assert decode_quoted_string("b'x'") == "x"

    def test_codepoint_too_large(self) -> None:
        with pytest.raises(ValueError, match="Codepoint too large"):
            decode_quoted_string('"\\u{110000}"')

    def test_not_a_string(self) -> None:
        with pytest.raises(ValueError, match="not a quoted string literal"):
            decode_quoted_string("abc")


class TestHeredoc:
    """Tests for heredoc and nowdoc decoding."""

    def test_heredoc_removes_closing_indentation(self) -> None:
        assert decode_heredoc("<<<EOT\n    a\n      b\n    EOT") == "a\n  b"

    def test_heredoc_applies_escapes(self) -> None:
        assert decode_heredoc('<<<EOT\nx\\ty "q"\nEOT') == 'x\ty "q"'

    def test_quoted_heredoc_label(self) -> None:
        assert decode_heredoc('<<<"EOT"\nx\\ty\nEOT') == "x\ty"

    def test_nowdoc_is_raw(self) -> None:
        assert decode_heredoc("<<<'EOT'\nx\\ty\nEOT") == "x\\ty"

    def test_crlf(self) -> None:
        assert decode_heredoc("<<<EOT\r\nline\r\nEOT") == "line"

    def test_not_a_heredoc(self) -> None:
        with pytest.raises(ValueError, match="not a heredoc literal"):
            decode_heredoc("'x'")
