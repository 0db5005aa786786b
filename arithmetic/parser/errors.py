"""
Error handling for the arithmetic parser.

Every failure of the pipeline is one of seven ParseErrorKinds. The lexer
has no error type of its own: unknown characters reach the parser as
INVALID tokens and are reported from here.

Author: xwest
"""

from enum import Enum
from typing import Optional, List
from dataclasses import dataclass

from ..lexer.tokens import Token, SourceLocation


class ParseErrorKind(Enum):
    """The complete taxonomy of parse failures."""
    UNMATCHED_LEFT_PARENTHESIS = "UnmatchedLeftParenthesis"
    UNMATCHED_RIGHT_PARENTHESIS = "UnmatchedRightParenthesis"
    NOTHING_TO_PARSE = "NothingToParse"
    INVALID_PREFIX = "InvalidPrefix"
    INVALID_INFIX = "InvalidInfix"
    INVALID_TOKEN = "InvalidToken"
    INVALID_EXPRESSION = "InvalidExpression"


@dataclass
class Diagnostic:
    """A rendered error report (message, location and hints)."""
    message: str
    location: Optional[SourceLocation]
    severity: str  # "error", "warning"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        if self.code:
            severity_prefix += f"[{self.code}]"
        result = f"{severity_prefix}: {self.message}\n"
        if self.location is not None:
            result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class ParseError(Exception):
    """
    Exception raised when the parser rejects its input.

    `kind` says which of the seven failures happened; the diagnostic adds
    a human readable message and, when known, where it happened.
    """

    def __init__(
        self,
        kind: ParseErrorKind,
        message: str,
        location: Optional[SourceLocation] = None,
        token: Optional[Token] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.token = token
        self.location = location
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=ERROR_CODES_BY_KIND[kind],
            help_text=help_text,
            suggestions=suggestions
        )

    def __str__(self) -> str:
        return str(self.diagnostic)

    def __repr__(self) -> str:
        return f"ParseError({self.kind.value}, {self.message!r})"


# Parser error codes for categorization
PARSER_ERROR_CODES = {
    "P001": ParseErrorKind.UNMATCHED_LEFT_PARENTHESIS,
    "P002": ParseErrorKind.UNMATCHED_RIGHT_PARENTHESIS,
    "P003": ParseErrorKind.NOTHING_TO_PARSE,
    "P004": ParseErrorKind.INVALID_PREFIX,
    "P005": ParseErrorKind.INVALID_INFIX,
    "P006": ParseErrorKind.INVALID_TOKEN,
    "P007": ParseErrorKind.INVALID_EXPRESSION,
}

ERROR_CODES_BY_KIND = {kind: code for code, kind in PARSER_ERROR_CODES.items()}


# Helper functions for creating each parser error

def create_unmatched_left_paren_error(open_token: Token, found: Optional[Token],
                                      end_location: Optional[SourceLocation] = None) -> ParseError:
    """Create an error for a '(' that is never closed."""
    location = found.location if found is not None else end_location
    found_str = f"'{found.lexeme}'" if found is not None else "end of input"
    return ParseError(
        ParseErrorKind.UNMATCHED_LEFT_PARENTHESIS,
        message=f"Expected ')', found {found_str}",
        location=location,
        token=found,
        help_text=f"The '(' at {open_token.location} was never closed.",
        suggestions=["Add a closing ')'"]
    )


def create_unmatched_right_paren_error(found: Token) -> ParseError:
    """Create an error for a ')' with no matching '('."""
    return ParseError(
        ParseErrorKind.UNMATCHED_RIGHT_PARENTHESIS,
        message="Unmatched ')'",
        location=found.location,
        token=found,
        help_text="This ')' does not close any open parenthesis.",
        suggestions=["Remove the ')'", "Add a matching '(' earlier"]
    )


def create_nothing_to_parse_error(location: Optional[SourceLocation] = None) -> ParseError:
    """Create an error for an empty token stream."""
    return ParseError(
        ParseErrorKind.NOTHING_TO_PARSE,
        message="Unexpected end of input, expected an expression",
        location=location,
        help_text="An expression must contain at least one number."
    )


def create_invalid_prefix_error(found: Token) -> ParseError:
    """Create an error for a token that cannot start an expression."""
    return ParseError(
        ParseErrorKind.INVALID_PREFIX,
        message=f"'{found.lexeme}' cannot start an expression",
        location=found.location,
        token=found,
        help_text="An expression starts with a number, '(' or unary '-'.",
    )


def create_invalid_infix_error(found: Token) -> ParseError:
    """Create an error for a token that cannot follow an operand."""
    return ParseError(
        ParseErrorKind.INVALID_INFIX,
        message=f"'{found.lexeme}' cannot follow an operand",
        location=found.location,
        token=found,
        help_text="Only '+', '-' and '*' may join two operands.",
    )


def create_invalid_token_error(found: Token) -> ParseError:
    """Create an error for a character the lexer did not recognise."""
    if found.lexeme.isprintable():
        help_text = f"The character '{found.lexeme}' is not valid in an expression."
    else:
        help_text = f"Non-printable character (Unicode: U+{ord(found.lexeme):04X}) is not allowed."
    return ParseError(
        ParseErrorKind.INVALID_TOKEN,
        message=f"Invalid character: {found.lexeme!r}",
        location=found.location,
        token=found,
        help_text=help_text,
    )


def create_invalid_expression_error(found: Token) -> ParseError:
    """Create an error for input left over after a complete expression."""
    return ParseError(
        ParseErrorKind.INVALID_EXPRESSION,
        message=f"Unexpected '{found.lexeme}' after complete expression",
        location=found.location,
        token=found,
        help_text="The expression ended before this token; an operator may be missing.",
        suggestions=["Insert an operator between the operands"]
    )
