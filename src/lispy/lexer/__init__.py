"""lispy lexer: single-pass tokenizer producing positioned tokens."""

from lispy.lexer.tokens import Position, Span, Token, TokenType
from lispy.lexer.lexer import (
    LexError,
    Lexer,
    MalformedNumber,
    UnexpectedCharacter,
    UnterminatedString,
    tokenize,
)

__all__ = [
    "Position",
    "Span",
    "Token",
    "TokenType",
    "LexError",
    "Lexer",
    "MalformedNumber",
    "UnexpectedCharacter",
    "UnterminatedString",
    "tokenize",
]
