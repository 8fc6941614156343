"""Tests for the lispy lexer/tokenizer."""

import pytest

from lispy.lexer.lexer import (
    Lexer,
    LexError,
    MalformedNumber,
    UnexpectedCharacter,
    UnterminatedString,
    tokenize,
)
from lispy.lexer.tokens import Position, Span, Token, TokenType, format_number


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def tok(token_type: TokenType, value, start: tuple, end: tuple | None = None) -> Token:
    """Build an expected token from (line, char) pairs."""
    end = end or start
    return Token(token_type, value, Span(Position(*start), Position(*end)))


def token_types(source: str) -> list[TokenType]:
    return [t.type for t in Lexer(source).tokenize()]


def token_values(source: str) -> list[tuple[TokenType, object]]:
    return [(t.type, t.value) for t in Lexer(source).tokenize()]


# ---------------------------------------------------------------------------
# Basic token recognition
# ---------------------------------------------------------------------------

class TestBasicTokens:
    def test_empty_source(self):
        assert Lexer("").tokenize() == []

    def test_whitespace_only(self):
        assert Lexer("  \t\n \n").tokenize() == []

    def test_parens(self):
        assert Lexer("(())").tokenize() == [
            tok(TokenType.OPEN_PAREN, None, (1, 0)),
            tok(TokenType.OPEN_PAREN, None, (1, 1)),
            tok(TokenType.CLOSE_PAREN, None, (1, 2)),
            tok(TokenType.CLOSE_PAREN, None, (1, 3)),
        ]

    def test_identifier(self):
        assert Lexer("println").tokenize() == [
            tok(TokenType.IDENTIFIER, "println", (1, 0), (1, 6)),
        ]

    def test_identifier_stops_at_parens_and_quotes(self):
        assert token_values('abc)def"x"') == [
            (TokenType.IDENTIFIER, "abc"),
            (TokenType.CLOSE_PAREN, None),
            (TokenType.IDENTIFIER, "def"),
            (TokenType.STRING_LITERAL, "x"),
        ]

    def test_operators_are_identifiers(self):
        assert token_values("+ - * / <= !=") == [
            (TokenType.IDENTIFIER, "+"),
            (TokenType.IDENTIFIER, "-"),
            (TokenType.IDENTIFIER, "*"),
            (TokenType.IDENTIFIER, "/"),
            (TokenType.IDENTIFIER, "<="),
            (TokenType.IDENTIFIER, "!="),
        ]

    def test_special_form_names_are_plain_identifiers(self):
        assert token_types("def fn if") == [TokenType.IDENTIFIER] * 3

    def test_identifier_with_punctuation(self):
        assert token_values("some_1dentifier-x? a.b") == [
            (TokenType.IDENTIFIER, "some_1dentifier-x?"),
            (TokenType.IDENTIFIER, "a.b"),
        ]

    def test_println_example(self):
        assert tokenize("(println (+ 1 2))") == [
            tok(TokenType.OPEN_PAREN, None, (1, 0)),
            tok(TokenType.IDENTIFIER, "println", (1, 1), (1, 7)),
            tok(TokenType.OPEN_PAREN, None, (1, 9)),
            tok(TokenType.IDENTIFIER, "+", (1, 10)),
            tok(TokenType.NUMBER, 1.0, (1, 12)),
            tok(TokenType.NUMBER, 2.0, (1, 14)),
            tok(TokenType.CLOSE_PAREN, None, (1, 15)),
            tok(TokenType.CLOSE_PAREN, None, (1, 16)),
        ]


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------

class TestNumbers:
    def test_integer(self):
        assert Lexer("120").tokenize() == [tok(TokenType.NUMBER, 120.0, (1, 0), (1, 2))]

    def test_decimal(self):
        assert Lexer("   3.14159)").tokenize() == [
            tok(TokenType.NUMBER, 3.14159, (1, 3), (1, 9)),
            tok(TokenType.CLOSE_PAREN, None, (1, 10)),
        ]

    def test_trailing_decimal_point(self):
        assert token_values("1.") == [(TokenType.NUMBER, 1.0)]

    def test_negative_number(self):
        assert Lexer("-5").tokenize() == [tok(TokenType.NUMBER, -5.0, (1, 0), (1, 1))]

    def test_explicit_positive_number(self):
        assert token_values("+7.5") == [(TokenType.NUMBER, 7.5)]

    def test_minus_with_space_is_identifier(self):
        assert Lexer("- 5").tokenize() == [
            tok(TokenType.IDENTIFIER, "-", (1, 0)),
            tok(TokenType.NUMBER, 5.0, (1, 2)),
        ]

    def test_minus_before_letters_is_identifier(self):
        assert token_values("-abc") == [(TokenType.IDENTIFIER, "-abc")]

    def test_number_ends_at_first_non_numeric(self):
        assert token_values("1abc") == [
            (TokenType.NUMBER, 1.0),
            (TokenType.IDENTIFIER, "abc"),
        ]

    def test_two_decimal_points(self):
        with pytest.raises(MalformedNumber, match="more than one decimal point") as exc:
            Lexer("120.0.1").tokenize()
        assert exc.value.span == Span(Position(1, 0), Position(1, 6))

    def test_malformed_number_on_later_line(self):
        with pytest.raises(MalformedNumber) as exc:
            Lexer("# comment \n 120.0.1").tokenize()
        assert exc.value.span == Span(Position(2, 1), Position(2, 7))


# ---------------------------------------------------------------------------
# Strings
# ---------------------------------------------------------------------------

class TestStrings:
    def test_string_literal(self):
        assert Lexer('"hello world"').tokenize() == [
            tok(TokenType.STRING_LITERAL, "hello world", (1, 0), (1, 12)),
        ]

    def test_empty_string(self):
        assert Lexer('""').tokenize() == [tok(TokenType.STRING_LITERAL, "", (1, 0), (1, 1))]

    def test_escapes_are_kept_verbatim(self):
        tokens = Lexer(r'"a\nb"').tokenize()
        assert tokens[0].value == r"a\nb"

    def test_escaped_quote_does_not_terminate(self):
        tokens = Lexer(r'"say \"hi\"" x').tokenize()
        assert [t.value for t in tokens] == [r"say \"hi\"", "x"]

    def test_string_with_parens_and_comment_char(self):
        assert token_values('"(# not a comment)"') == [
            (TokenType.STRING_LITERAL, "(# not a comment)"),
        ]

    def test_multiline_string(self):
        assert Lexer('"a\nb"').tokenize() == [
            tok(TokenType.STRING_LITERAL, "a\nb", (1, 0), (2, 1)),
        ]

    def test_unterminated_string(self):
        with pytest.raises(UnterminatedString, match="Unterminated string") as exc:
            Lexer('"hello').tokenize()
        assert exc.value.span == Span(Position(1, 0), Position(1, 5))

    def test_unterminated_after_trailing_backslash(self):
        with pytest.raises(UnterminatedString):
            Lexer('"abc\\').tokenize()


# ---------------------------------------------------------------------------
# Comments and whitespace
# ---------------------------------------------------------------------------

class TestComments:
    def test_comment_only(self):
        assert Lexer("# only a comment").tokenize() == []

    def test_comment_lines(self):
        assert Lexer("  # only \n # comments").tokenize() == []

    def test_trailing_comment(self):
        tokens = Lexer("(foo) # trailing\n(bar)").tokenize()
        assert [t.type for t in tokens] == [
            TokenType.OPEN_PAREN,
            TokenType.IDENTIFIER,
            TokenType.CLOSE_PAREN,
            TokenType.OPEN_PAREN,
            TokenType.IDENTIFIER,
            TokenType.CLOSE_PAREN,
        ]
        assert tokens[4] == tok(TokenType.IDENTIFIER, "bar", (2, 1), (2, 3))

    def test_hash_inside_identifier(self):
        assert token_values("foo#bar") == [(TokenType.IDENTIFIER, "foo#bar")]


# ---------------------------------------------------------------------------
# Source location tracking
# ---------------------------------------------------------------------------

class TestSourceLocations:
    def test_line_numbers(self):
        tokens = Lexer("a\nb\n  c").tokenize()
        assert [t.start for t in tokens] == [
            Position(1, 0),
            Position(2, 0),
            Position(3, 2),
        ]

    def test_tab_advances_one_char(self):
        assert Lexer("\tx").tokenize()[0].start == Position(1, 1)

    def test_crlf_is_one_line_break(self):
        assert Lexer("a\r\nb").tokenize()[1].start == Position(2, 0)

    def test_lone_carriage_return_breaks_line(self):
        assert Lexer("a\rb").tokenize()[1].start == Position(2, 0)

    def test_spans_are_monotonic_and_disjoint(self):
        source = (
            "(def add (fn (a b)\n"
            "  (+ a b)))  # sum\n"
            '(println "x" -1.5 (add 1 2))\n'
        )
        tokens = Lexer(source).tokenize()
        for t in tokens:
            assert t.start <= t.end
        for prev, nxt in zip(tokens, tokens[1:]):
            assert prev.end < nxt.start

    def test_tokenize_is_repeatable(self):
        source = '(if (> x 0) "pos" "neg")'
        lexer = Lexer(source)
        assert lexer.tokenize() == lexer.tokenize()
        assert tokenize(source) == tokenize(source)


# ---------------------------------------------------------------------------
# Debug formatting
# ---------------------------------------------------------------------------

class TestFormatting:
    def test_point_token(self):
        assert str(tok(TokenType.CLOSE_PAREN, None, (1, 1))) == "CloseParen[line 1 char 1]"

    def test_span_token(self):
        token = tok(TokenType.IDENTIFIER, "println", (1, 1), (1, 7))
        assert str(token) == 'Identifier("println")[line 1 char 1 -> line 1 char 7]'

    def test_single_char_payload_token(self):
        assert str(tok(TokenType.NUMBER, 1.0, (1, 12))) == "Number(1.0)[line 1 char 12]"

    def test_string_payload_is_escaped(self):
        token = tok(TokenType.STRING_LITERAL, 'a "b"\n', (1, 0), (2, 0))
        assert str(token) == 'StringLiteral("a \\"b\\"\\n")[line 1 char 0 -> line 2 char 0]'

    @pytest.mark.parametrize("value, text", [
        (1.0, "1.0"),
        (-5.0, "-5.0"),
        (3.14159, "3.14159"),
        (1e16, "1e16"),
        (1.5e-7, "1.5e-7"),
        (float("inf"), "inf"),
        (float("nan"), "NaN"),
    ])
    def test_format_number(self, value, text):
        assert format_number(value) == text


# ---------------------------------------------------------------------------
# Error cases
# ---------------------------------------------------------------------------

class TestErrors:
    def test_control_character(self):
        with pytest.raises(UnexpectedCharacter, match="Unexpected character") as exc:
            Lexer("(a \x00)").tokenize()
        assert exc.value.span == Span.point(Position(1, 3))

    def test_control_character_ends_identifier(self):
        with pytest.raises(UnexpectedCharacter):
            Lexer("abc\x07").tokenize()

    def test_errors_share_base_class(self):
        for source in ("1.2.3", '"open', "\x01"):
            with pytest.raises(LexError):
                Lexer(source).tokenize()

    def test_message_has_file_and_position(self):
        with pytest.raises(LexError, match=r"^main\.lispy:2:3: ") as exc:
            Lexer('(a)\n(b "c', filename="main.lispy").tokenize()
        assert exc.value.filename == "main.lispy"
