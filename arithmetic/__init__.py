"""
Arithmetic Expression Package

Evaluates integer arithmetic expressions (+, -, *, parentheses and unary
minus) given as text.

Architecture:
    arithmetic/
    ├── lexer/           # Lazy tokenization with one-token lookahead
    ├── parser/          # Precedence climbing parser and AST
    └── evaluator/       # Tree evaluation and entry points

Author: xwest
License: MIT
"""

import logging

__version__ = "0.1.0"
__author__ = "xwest"
__email__ = "dev@neuralscript.org"
__license__ = "MIT"

from .lexer import Lexer, Token, TokenType, Operator
from .parser import Parser, ParseError, ParseErrorKind, Value, BinaryOp
from .evaluator import Evaluator, EvaluationResult, evaluate, try_evaluate

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Entry points
    "evaluate",
    "try_evaluate",
    "EvaluationResult",

    # Pipeline stages
    "Lexer",
    "Parser",
    "Evaluator",

    # Data model
    "Token",
    "TokenType",
    "Operator",
    "Value",
    "BinaryOp",

    # Errors
    "ParseError",
    "ParseErrorKind",

    # Version info
    "__version__",
    "__author__",
    "__email__",
    "__license__",
]
