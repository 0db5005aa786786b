"""
Arithmetic Parser Package

Implements a precedence climbing parser (a non object-oriented take on
Pratt parsing) that turns a token stream into an expression tree.

Key Features:
- Table-driven prefix/infix dispatch with binding powers
- Left-associative binary operators
- Unary minus folded into subtraction from zero
- Fail-fast error reporting with a fixed seven-kind taxonomy

Author: xwest
"""

from .ast_nodes import (
    AST, ASTNode, ASTNodeType, ASTVisitor, Expression, Value, BinaryOp,
    SourceSpan, negate,
)
from .parser import Parser, BindingPower, parse, parse_string
from .errors import ParseError, ParseErrorKind, Diagnostic

__all__ = [
    # Core parser
    "Parser", "BindingPower", "parse", "parse_string",

    # AST nodes
    "AST", "ASTNode", "ASTNodeType", "ASTVisitor",
    "Expression", "Value", "BinaryOp", "SourceSpan", "negate",

    # Error handling
    "ParseError", "ParseErrorKind", "Diagnostic",
]
