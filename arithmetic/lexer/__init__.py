"""
Arithmetic Lexer Package

Implements a lazy lexical analyzer (tokenizer) for integer arithmetic
expressions.

Key Features:
- Lazy, generator-based scanning
- One-token lookahead through TokenStream
- Invalid characters become INVALID tokens instead of errors
- Source location tracking for diagnostics

Author: xwest
"""

from .tokens import Token, TokenType, Operator, SourceLocation
from .lexer import Lexer, TokenStream, tokenize_string

__all__ = [
    "Lexer",
    "TokenStream",
    "Token",
    "TokenType",
    "Operator",
    "SourceLocation",
    "tokenize_string",
]
