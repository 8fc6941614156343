"""lispy recursive descent parser.

Transforms the flat token list from the lexer into immutable AST
expressions. Each open paren is handled by one recursive call, so the
Python call stack holds the pending forms; a form is finished when its
matching close paren is consumed.

Grammar reference (simplified EBNF):

    program     ::= expr*
    expr        ::= NUMBER | STRING | IDENTIFIER | form
    form        ::= '(' (def | fn | if | application) ')'
    def         ::= 'def' IDENTIFIER expr
    fn          ::= 'fn' '(' IDENTIFIER* ')' expr*
    if          ::= 'if' expr branch branch
    branch      ::= '(' ')' | '(' form expr* ')' | expr
    application ::= IDENTIFIER expr*

A branch whose '(' is followed by '(' or ')' is a parenthesized sequence of
expressions, `()` being the empty one; any other branch is a single
expression.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from lispy.ast.nodes import (
    DefExpr,
    EvaluateExpr,
    Expr,
    FnExpr,
    IdentifierExpr,
    IfExpr,
    NumberExpr,
    StringLiteralExpr,
)
from lispy.lexer.tokens import Span, Token, TokenType

logger = logging.getLogger(__name__)


class ParseError(Exception):
    """Raised on parse errors with human-readable diagnostics.

    Running out of tokens inside a form is reported at the unclosed '('.
    """

    def __init__(self, message: str, span: Span, filename: str = "<unknown>"):
        self.message = message
        self.span = span
        self.filename = filename
        loc = f"{filename}:{span.start.line}:{span.start.char}"
        super().__init__(f"{loc}: {message}")


class ArityMismatch(ParseError):
    """A special form with the wrong number of sub-forms."""

    def __init__(self, form: str, expected: int, found: int, span: Span,
                 filename: str = "<unknown>"):
        self.form = form
        self.expected = expected
        self.found = found
        super().__init__(
            f"'{form}' expects {expected} sub-forms, got {found}", span, filename,
        )


class InvalidCallee(ParseError):
    """The token after '(' is not an identifier."""

    def __init__(self, found: Token, filename: str = "<unknown>"):
        self.found = found
        super().__init__(
            f"Expected an identifier after '(', got {found.describe()}",
            found.span, filename,
        )


class UnbalancedParens(ParseError):
    """An unmatched ')' or a '(' still open at the end of input."""


class NestingTooDeep(ParseError):
    """Forms nested deeper than the interpreter's recursion limit allows."""

    def __init__(self, span: Span, filename: str = "<unknown>"):
        super().__init__("Forms nested too deeply", span, filename)


class UnexpectedToken(ParseError):
    """A token that does not fit the form being parsed."""

    def __init__(self, found: Token, context: str, filename: str = "<unknown>"):
        self.found = found
        self.context = context
        super().__init__(
            f"Unexpected {found.describe()} in {context}", found.span, filename,
        )


class Parser:
    """Recursive descent parser for lispy source code.

    Usage::

        from lispy.lexer import Lexer
        from lispy.parser import Parser

        tokens = Lexer(source, "example.lispy").tokenize()
        exprs = Parser(tokens, "example.lispy").parse()
    """

    def __init__(self, tokens: Iterable[Token], filename: str = "<unknown>") -> None:
        self.tokens = list(tokens)
        self.filename = filename
        self.pos = 0

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def parse(self) -> list[Expr]:
        """Parse the entire token list into top-level expressions."""
        exprs = list(self.expressions())
        logger.debug(f"{self.filename}: {len(exprs)} top-level expressions")
        return exprs

    def expressions(self) -> Iterator[Expr]:
        """Yield top-level expressions one at a time, as each is completed."""
        self.pos = 0
        while not self._at_end():
            try:
                expr = self._parse_expr()
            except RecursionError:
                raise NestingTooDeep(self.tokens[self.pos - 1].span, self.filename) from None
            yield expr

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _parse_expr(self) -> Expr:
        tok = self._advance()

        if tok.type == TokenType.OPEN_PAREN:
            return self._parse_form(tok)
        if tok.type == TokenType.CLOSE_PAREN:
            raise UnbalancedParens("Unmatched ')'", tok.span, self.filename)
        if tok.type == TokenType.NUMBER:
            return NumberExpr(tok.value, span=tok.span)
        if tok.type == TokenType.STRING_LITERAL:
            return StringLiteralExpr(tok.value, span=tok.span)
        return IdentifierExpr(tok.value, span=tok.span)

    def _parse_form(self, open_tok: Token) -> Expr:
        """Parse the rest of a form whose '(' has been consumed."""
        head = self._expect_open(open_tok)
        if not head.is_identifier():
            raise InvalidCallee(head, self.filename)
        self._advance()

        if head.value == "def":
            return self._parse_def(open_tok)
        if head.value == "fn":
            return self._parse_fn(open_tok)
        if head.value == "if":
            return self._parse_if(open_tok)

        args, close_tok = self._parse_until_close(open_tok)
        return EvaluateExpr(head.value, args, span=open_tok.span.to(close_tok.span))

    # ------------------------------------------------------------------
    # Special forms
    # ------------------------------------------------------------------

    def _parse_def(self, open_tok: Token) -> DefExpr:
        name_tok = self._expect_open(open_tok)
        items, close_tok = self._parse_until_close(open_tok)
        span = open_tok.span.to(close_tok.span)

        if len(items) != 2:
            raise ArityMismatch("def", 2, len(items), span, self.filename)
        name, value = items
        if not isinstance(name, IdentifierExpr):
            raise UnexpectedToken(name_tok, "def name", self.filename)
        return DefExpr(name.name, value, span=span)

    def _parse_fn(self, open_tok: Token) -> FnExpr:
        params_tok = self._expect_open(open_tok)
        if params_tok.type != TokenType.OPEN_PAREN:
            raise UnexpectedToken(params_tok, "fn parameter list", self.filename)
        self._advance()

        params: list[str] = []
        while not self._check_close(params_tok):
            tok = self._advance()
            if not tok.is_identifier():
                raise UnexpectedToken(tok, "fn parameter", self.filename)
            params.append(tok.value)
        self._advance()

        body, close_tok = self._parse_until_close(open_tok)
        return FnExpr(params, body, span=open_tok.span.to(close_tok.span))

    def _parse_if(self, open_tok: Token) -> IfExpr:
        forms: list = []
        while not self._check_close(open_tok):
            forms.append(self._parse_branch() if forms else self._parse_expr())
        close_tok = self._advance()
        span = open_tok.span.to(close_tok.span)

        if len(forms) != 3:
            raise ArityMismatch("if", 3, len(forms), span, self.filename)
        condition, then_branch, else_branch = forms
        return IfExpr(condition, then_branch, else_branch, span=span)

    def _parse_branch(self) -> list[Expr]:
        if self._check(TokenType.OPEN_PAREN) and self._peek_type(1) in (
            TokenType.OPEN_PAREN, TokenType.CLOSE_PAREN,
        ):
            branch, _ = self._parse_until_close(self._advance())
            return branch
        return [self._parse_expr()]

    # ------------------------------------------------------------------
    # Token stream helpers
    # ------------------------------------------------------------------

    def _parse_until_close(self, open_tok: Token) -> tuple[list[Expr], Token]:
        """Parse expressions up to the ')' matching `open_tok`, consuming it."""
        exprs: list[Expr] = []
        while not self._check_close(open_tok):
            exprs.append(self._parse_expr())
        return exprs, self._advance()

    def _expect_open(self, open_tok: Token) -> Token:
        """Return the current token, or fail because `open_tok` is never closed."""
        if self._at_end():
            raise UnbalancedParens(
                "Unclosed '(': reached end of input", open_tok.span, self.filename,
            )
        return self.tokens[self.pos]

    def _check_close(self, open_tok: Token) -> bool:
        return self._expect_open(open_tok).type == TokenType.CLOSE_PAREN

    def _advance(self) -> Token:
        """Consume and return the current token."""
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    def _check(self, token_type: TokenType) -> bool:
        """Check if current token matches without consuming."""
        return not self._at_end() and self.tokens[self.pos].type == token_type

    def _peek_type(self, offset: int) -> TokenType | None:
        """Look ahead at a token type without consuming."""
        idx = self.pos + offset
        if idx >= len(self.tokens):
            return None
        return self.tokens[idx].type

    def _at_end(self) -> bool:
        return self.pos >= len(self.tokens)


def parse(tokens: Iterable[Token], filename: str = "<unknown>") -> list[Expr]:
    """Parse `tokens` with a fresh `Parser`."""
    return Parser(tokens, filename).parse()
