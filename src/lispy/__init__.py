"""
lispy - front end for a minimal Lisp-family language.

Turns source text into positioned tokens, then into AST expressions.

Example:
    >>> from lispy import tokenize, parse
    >>> parse(tokenize("(println (+ 1 2))"))
    [EvaluateExpr(callee='println', args=[EvaluateExpr(callee='+', args=[NumberExpr(value=1.0), NumberExpr(value=2.0)])])]

Version: 0.1.0
"""

__version__ = "0.1.0"

from lispy.lexer import LexError, Lexer, Token, TokenType, tokenize
from lispy.parser import ParseError, Parser, parse

__all__ = [
    "__version__",
    "LexError",
    "Lexer",
    "Token",
    "TokenType",
    "tokenize",
    "ParseError",
    "Parser",
    "parse",
]
