"""lispy lexer: hand-written single-pass tokenizer.

Design decisions:
- Whitespace and parens delimit tokens; everything else is an atom.
- There are no reserved words. `def`, `fn` and `if` come out as ordinary
  identifiers and are recognized by the parser.
- Comments (# ...) are discarded, not tokenized.
- String literals are kept verbatim; a backslash only stops the next
  character from closing the literal.
- Produces a flat, finite token list with no end-of-file marker.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from lispy.lexer.tokens import Position, Span, Token, TokenType

logger = logging.getLogger(__name__)


class LexError(Exception):
    """Raised on lexical errors with source location."""

    def __init__(self, message: str, span: Span, filename: str = "<unknown>"):
        self.message = message
        self.span = span
        self.filename = filename
        start = span.start
        super().__init__(f"{filename}:{start.line}:{start.char}: {message}")


class MalformedNumber(LexError):
    """A numeric run with more than one decimal point, or otherwise not a float."""


class UnterminatedString(LexError):
    """Input ended before the closing quote of a string literal."""


class UnexpectedCharacter(LexError):
    """A control character outside the source alphabet."""


class Lexer:
    """Tokenizes lispy source code into a list of `Token` objects.

    Usage::

        lexer = Lexer(source_text, filename="example.lispy")
        tokens = lexer.tokenize()
    """

    COMMENT_CHAR = "#"
    WHITESPACE = frozenset(" \t\n\r")
    DELIMITERS = WHITESPACE | {"(", ")", '"'}

    def __init__(self, source: str, filename: str = "<unknown>") -> None:
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.char = 0
        self.last = Position(1, 0)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def tokenize(self) -> list[Token]:
        """Tokenize the entire source and return the token list."""
        self.pos = 0
        self.line = 1
        self.char = 0
        self.last = Position(1, 0)

        tokens = list(self._scan())
        logger.debug(f"{self.filename}: {len(tokens)} tokens")
        return tokens

    # ------------------------------------------------------------------
    # Token scanning
    # ------------------------------------------------------------------

    def _scan(self) -> Iterator[Token]:
        while not self._at_end():
            ch = self._peek()

            if ch in self.WHITESPACE:
                self._advance()
            elif ch == self.COMMENT_CHAR:
                self._skip_comment()
            elif ch == "(":
                yield self._scan_paren(TokenType.OPEN_PAREN)
            elif ch == ")":
                yield self._scan_paren(TokenType.CLOSE_PAREN)
            elif ch == '"':
                yield self._scan_string()
            elif self._starts_number():
                yield self._scan_number()
            elif _is_control(ch):
                here = Span.point(self._here())
                raise UnexpectedCharacter(
                    f"Unexpected character: {ch!r}", here, self.filename
                )
            else:
                yield self._scan_identifier()

    def _scan_paren(self, token_type: TokenType) -> Token:
        start = self._here()
        self._advance()
        return Token(token_type, None, Span.point(start))

    def _scan_string(self) -> Token:
        """Scan a double-quoted string literal without interpreting escapes."""
        start = self._here()
        self._advance()  # consume opening quote
        chars: list[str] = []

        while not self._at_end() and self._peek() != '"':
            if self._peek() == "\\":
                chars.append(self._advance())
                if self._at_end():
                    break
            chars.append(self._advance())

        if self._at_end():
            raise UnterminatedString(
                "Unterminated string literal",
                Span(start, self.last),
                self.filename,
            )

        self._advance()  # consume closing quote
        return Token(TokenType.STRING_LITERAL, "".join(chars), Span(start, self.last))

    def _scan_number(self) -> Token:
        """Scan an optionally signed run of digits and decimal points."""
        start = self._here()
        chars = [self._advance()]

        while not self._at_end() and (_is_digit(self._peek()) or self._peek() == "."):
            chars.append(self._advance())

        text = "".join(chars)
        span = Span(start, self.last)
        if text.count(".") > 1:
            raise MalformedNumber(
                f"Unable to parse number {text!r}: more than one decimal point",
                span, self.filename,
            )
        try:
            value = float(text)
        except ValueError:
            raise MalformedNumber(
                f"Unable to parse number {text!r}", span, self.filename,
            ) from None

        return Token(TokenType.NUMBER, value, span)

    def _scan_identifier(self) -> Token:
        """Scan a maximal run of non-delimiter characters."""
        start = self._here()
        chars: list[str] = []

        while not self._at_end() and self._is_identifier_char(self._peek()):
            chars.append(self._advance())

        return Token(TokenType.IDENTIFIER, "".join(chars), Span(start, self.last))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _peek(self) -> str:
        """Return the current character without consuming it."""
        return self.source[self.pos]

    def _peek_ahead(self, offset: int) -> str | None:
        """Return a character at an offset ahead, or None if past end."""
        idx = self.pos + offset
        if idx >= len(self.source):
            return None
        return self.source[idx]

    def _advance(self) -> str:
        """Consume and return the current character.

        `\\n`, a lone `\\r`, and `\\r\\n` (counted once) end a line.
        """
        ch = self.source[self.pos]
        self.last = self._here()
        self.pos += 1
        if ch == "\n" or (ch == "\r" and self._peek_ahead(0) != "\n"):
            self.line += 1
            self.char = 0
        else:
            self.char += 1
        return ch

    def _at_end(self) -> bool:
        return self.pos >= len(self.source)

    def _here(self) -> Position:
        return Position(self.line, self.char)

    def _starts_number(self) -> bool:
        ch = self._peek()
        if _is_digit(ch):
            return True
        next_ch = self._peek_ahead(1)
        return ch in "+-" and next_ch is not None and _is_digit(next_ch)

    def _is_identifier_char(self, ch: str) -> bool:
        return ch not in self.DELIMITERS and not _is_control(ch)

    def _skip_comment(self) -> None:
        """Skip from # to end of line."""
        while not self._at_end() and self._peek() not in "\r\n":
            self._advance()


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _is_control(ch: str) -> bool:
    return (ch < " " and ch not in Lexer.WHITESPACE) or ch == "\x7f"


def tokenize(source: str, filename: str = "<unknown>") -> list[Token]:
    """Tokenize `source` with a fresh `Lexer`."""
    return Lexer(source, filename).tokenize()
