"""lispy parser: recursive descent from tokens to AST expressions."""

from lispy.parser.parser import (
    ArityMismatch,
    InvalidCallee,
    NestingTooDeep,
    ParseError,
    Parser,
    UnbalancedParens,
    UnexpectedToken,
    parse,
)

__all__ = [
    "ArityMismatch",
    "InvalidCallee",
    "NestingTooDeep",
    "ParseError",
    "Parser",
    "UnbalancedParens",
    "UnexpectedToken",
    "parse",
]
