"""Token types, source positions and the Token dataclass for the lispy lexer."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum


class TokenType(Enum):
    """Every distinct token the lispy lexer can produce.

    The value of each member is the name used in debug output.
    """

    # Structure
    OPEN_PAREN = "OpenParen"
    CLOSE_PAREN = "CloseParen"

    # Atoms
    IDENTIFIER = "Identifier"
    NUMBER = "Number"
    STRING_LITERAL = "StringLiteral"


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """A point in source text: 1-based line, 0-based character column."""

    line: int
    char: int

    def __str__(self) -> str:
        return f"line {self.line} char {self.char}"


@dataclass(frozen=True, slots=True)
class Span:
    """Inclusive start/end positions of a token or expression."""

    start: Position
    end: Position

    @classmethod
    def point(cls, position: Position) -> Span:
        return cls(position, position)

    @property
    def is_point(self) -> bool:
        return self.start == self.end

    def to(self, other: Span) -> Span:
        """Return the span running from the start of this one to the end of `other`."""
        return Span(self.start, other.end)

    def __str__(self) -> str:
        if self.is_point:
            return f"[{self.start}]"
        return f"[{self.start} -> {self.end}]"


@dataclass(frozen=True, slots=True)
class Token:
    """A single token produced by the lexer.

    `value` is the identifier or string text, the parsed float for numbers,
    and None for parens. Tokens are immutable once produced.
    """

    type: TokenType
    value: str | float | None
    span: Span

    @property
    def start(self) -> Position:
        return self.span.start

    @property
    def end(self) -> Position:
        return self.span.end

    def is_identifier(self, name: str | None = None) -> bool:
        if self.type != TokenType.IDENTIFIER:
            return False
        return name is None or self.value == name

    def describe(self) -> str:
        """Variant name plus payload, e.g. ``Identifier("println")``."""
        if self.value is None:
            return self.type.value
        return f"{self.type.value}({debug_literal(self.value)})"

    def __str__(self) -> str:
        return f"{self.describe()}{self.span}"


def debug_literal(value: str | float) -> str:
    """Render a token or expression payload the way debug output shows it."""
    if isinstance(value, str):
        return quote(value)
    return format_number(value)


_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r", "\t": "\\t"}


def quote(text: str) -> str:
    return '"' + "".join(_ESCAPES.get(ch, ch) for ch in text) + '"'


def format_number(value: float) -> str:
    """Format a float with a mandatory fractional part or a bare exponent.

    1.0 -> "1.0", 1e16 -> "1e16", 1.5e-07 -> "1.5e-7".
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = repr(value)
    if "e" not in text:
        return text
    mantissa, exponent = text.split("e")
    sign = "-" if exponent.startswith("-") else ""
    return f"{mantissa}e{sign}{exponent.lstrip('+-').lstrip('0') or '0'}"
