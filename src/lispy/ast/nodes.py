"""Immutable AST node definitions for lispy.

Every node carries the span of the source it was parsed from. Spans are
for diagnostics only: they are excluded from equality, so two nodes with
the same shape compare equal wherever they came from. The AST is never
mutated after construction and each node exclusively owns its children.

`str()` of a node gives the debug form printed by `lispy parse`, e.g.::

    EvaluateExpr { callee: "+", args: [NumberExpr(1.0), NumberExpr(2.0)] }
"""

from __future__ import annotations

from dataclasses import dataclass, field

from lispy.lexer.tokens import Span, format_number, quote


# ---------------------------------------------------------------------------
# Base node
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Expr:
    """Base class for all expressions."""

    span: Span | None = field(default=None, kw_only=True, compare=False, repr=False)


# ---------------------------------------------------------------------------
# Leaf expressions
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class NumberExpr(Expr):
    value: float

    def __str__(self) -> str:
        return f"NumberExpr({format_number(self.value)})"


@dataclass(frozen=True)
class StringLiteralExpr(Expr):
    text: str

    def __str__(self) -> str:
        return f"StringLiteralExpr({quote(self.text)})"


@dataclass(frozen=True)
class IdentifierExpr(Expr):
    """A bare name used as a value."""

    name: str

    def __str__(self) -> str:
        return f"IdentifierExpr({quote(self.name)})"


# ---------------------------------------------------------------------------
# Special forms
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DefExpr(Expr):
    """(def name value)"""

    name: str
    value: Expr

    def __str__(self) -> str:
        return f"DefExpr {{ name: {quote(self.name)}, value: {self.value} }}"


@dataclass(frozen=True)
class FnExpr(Expr):
    """(fn (param ...) body ...)"""

    params: list[str] = field(default_factory=list)
    body: list[Expr] = field(default_factory=list)

    def __str__(self) -> str:
        params = _list_str(quote(p) for p in self.params)
        return f"FnExpr {{ params: {params}, body: {_list_str(self.body)} }}"


@dataclass(frozen=True)
class IfExpr(Expr):
    """(if condition then else)"""

    condition: Expr
    then_branch: list[Expr] = field(default_factory=list)
    else_branch: list[Expr] = field(default_factory=list)

    def __str__(self) -> str:
        return (
            f"IfExpr {{ condition: {self.condition}, "
            f"then_branch: {_list_str(self.then_branch)}, "
            f"else_branch: {_list_str(self.else_branch)} }}"
        )


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class EvaluateExpr(Expr):
    """Generic application: (callee arg ...). Primitive operators such
    as `+` are ordinary callees."""

    callee: str
    args: list[Expr] = field(default_factory=list)

    def __str__(self) -> str:
        return f"EvaluateExpr {{ callee: {quote(self.callee)}, args: {_list_str(self.args)} }}"


def _list_str(items) -> str:
    return "[" + ", ".join(str(item) for item in items) + "]"
