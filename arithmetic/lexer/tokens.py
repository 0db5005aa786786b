"""
Token definitions for the arithmetic lexer.

This module defines the token types recognised by the expression grammar:
- Integer literals (runs of ASCII decimal digits)
- The three arithmetic operators (+, -, *)
- Parentheses
- A catch-all INVALID token for any other character

Author: xwest
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional


class TokenType(Enum):
    """Enumeration of all token types in the expression grammar."""

    # Literals
    NUMBER = auto()                 # 42, 007

    # Operators
    PLUS = auto()                   # +
    MINUS = auto()                  # -
    MULTIPLY = auto()               # *

    # Grouping
    LEFT_PAREN = auto()             # (
    RIGHT_PAREN = auto()            # )

    # Any character the grammar does not know about
    INVALID = auto()


class Operator(Enum):
    """Arithmetic operator kinds, shared by tokens and AST nodes."""
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source text.

    Used for error reporting only; it plays no part in parsing decisions.
    """
    filename: str
    line: int
    column: int
    offset: int  # Character offset from start of input

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token.

    Contains the token type, lexeme (raw text), semantic value
    and source location.
    """
    type: TokenType
    lexeme: str                     # Raw text from source
    value: Optional[int]            # int for NUMBER, None otherwise
    location: SourceLocation

    def __str__(self) -> str:
        if self.value is not None:
            return f"{self.type.name}({self.lexeme})"
        return f"{self.type.name}({self.lexeme!r})"

    def __repr__(self) -> str:
        value = int_to_digits(self.value) if self.value is not None else None
        return (f"Token({self.type.name}, {self.lexeme!r}, "
                f"{value}, {self.location!r})")

    @property
    def is_operator(self) -> bool:
        """Check if this token is an arithmetic operator."""
        return self.type in OPERATOR_KINDS

    @property
    def operator(self) -> Optional[Operator]:
        """The operator kind for operator tokens, None for everything else."""
        return OPERATOR_KINDS.get(self.type)


# Single-character lexemes and the token type each one produces
SINGLE_CHAR_TOKENS = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.MULTIPLY,
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
}

OPERATOR_KINDS = {
    TokenType.PLUS: Operator.ADD,
    TokenType.MINUS: Operator.SUBTRACT,
    TokenType.MULTIPLY: Operator.MULTIPLY,
}

# Only ASCII digits form numbers; str.isdigit() would also accept e.g. '٣'
DIGITS = frozenset("0123456789")

# Only the space character separates tokens
WHITESPACE = frozenset(" ")

# int() and str() refuse decimal strings longer than sys.int_info's
# default_max_str_digits (4300), so long literals are converted in chunks
DIGIT_CHUNK = 4000
_CHUNK_BASE = 10 ** DIGIT_CHUNK


def digits_to_int(digits: str) -> int:
    """Exact value of a run of ASCII digits, however long."""
    value = 0
    for start in range(0, len(digits), DIGIT_CHUNK):
        chunk = digits[start:start + DIGIT_CHUNK]
        value = value * 10 ** len(chunk) + int(chunk)
    return value


def int_to_digits(value: int) -> str:
    """Decimal text of a non-negative integer, however large."""
    chunks = []
    while value >= _CHUNK_BASE:
        value, chunk = divmod(value, _CHUNK_BASE)
        chunks.append(str(chunk).zfill(DIGIT_CHUNK))
    chunks.append(str(value))
    return "".join(reversed(chunks))
