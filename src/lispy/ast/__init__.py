"""lispy AST node types."""

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

__all__ = [
    "DefExpr",
    "EvaluateExpr",
    "Expr",
    "FnExpr",
    "IdentifierExpr",
    "IfExpr",
    "NumberExpr",
    "StringLiteralExpr",
]
