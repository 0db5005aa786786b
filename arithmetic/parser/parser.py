"""
Precedence Climbing Parser Implementation

A table-driven, top-down operator precedence parser in the spirit of Pratt
parsing. Each token type may have a prefix parser (what it means at the
start of an expression), an infix parser (what it means after a complete
operand) and a binding power. parse_expression() keeps folding infix
operators into the tree while the next token binds tighter than the
caller's minimum.

Author: xwest
"""

import logging
from typing import Callable, Dict, Iterable, Optional, Union
from enum import IntEnum

from ..lexer.tokens import Token, TokenType
from ..lexer.lexer import TokenStream, tokenize_string
from .ast_nodes import Expression, Value, BinaryOp, SourceSpan, negate
from .errors import (
    create_unmatched_left_paren_error, create_unmatched_right_paren_error,
    create_nothing_to_parse_error, create_invalid_prefix_error,
    create_invalid_infix_error, create_invalid_token_error,
    create_invalid_expression_error
)

logger = logging.getLogger(__name__)


class BindingPower(IntEnum):
    """Binding power levels. Only their ordering matters."""
    NONE = 0            # numbers, invalid tokens, end of input
    GROUPING = 5        # ( )
    TERM = 15           # + -
    FACTOR = 20         # *


class Parser:
    """
    Precedence climbing parser for arithmetic expressions.

    Consumes tokens with one token of lookahead and produces a single
    expression tree, or raises ParseError at the first problem found.
    """

    def __init__(self, tokens: Union[TokenStream, Iterable[Token]]):
        """
        Initialize parser with a token stream.

        Args:
            tokens: TokenStream from the lexer, or any iterable of tokens
        """
        if not isinstance(tokens, TokenStream):
            tokens = TokenStream(tokens)
        self.tokens = tokens

        self._init_parsing_tables()

    def _init_parsing_tables(self):
        """Initialize binding power and parsing function tables."""

        # Prefix parsing functions (tokens that can start an expression)
        self.prefix_parsers: Dict[TokenType, Callable[[Token], Expression]] = {
            TokenType.NUMBER: self._parse_number,
            TokenType.LEFT_PAREN: self._parse_grouping,
            TokenType.MINUS: self._parse_negation,
        }

        # Infix parsing functions (tokens that follow a complete operand)
        self.infix_parsers: Dict[TokenType, Callable[[Expression, Token], Expression]] = {
            TokenType.PLUS: self._parse_binary,
            TokenType.MINUS: self._parse_binary,
            TokenType.MULTIPLY: self._parse_binary,
            TokenType.RIGHT_PAREN: self._parse_unmatched_right_paren,
        }

        self.binding_powers: Dict[TokenType, BindingPower] = {
            TokenType.NUMBER: BindingPower.NONE,
            TokenType.INVALID: BindingPower.NONE,
            TokenType.LEFT_PAREN: BindingPower.GROUPING,
            TokenType.RIGHT_PAREN: BindingPower.GROUPING,
            TokenType.PLUS: BindingPower.TERM,
            TokenType.MINUS: BindingPower.TERM,
            TokenType.MULTIPLY: BindingPower.FACTOR,
        }

    def parse(self) -> Expression:
        """
        Parse the whole token stream into one expression tree.

        Returns:
            Root node of the expression

        Raises:
            ParseError: If the tokens do not form exactly one expression
        """
        expr = self.parse_expression(BindingPower.NONE)

        leftover = self.tokens.next()
        if leftover is not None:
            raise create_invalid_expression_error(leftover)

        logger.debug("Parsed expression with %s root spanning %s", expr.node_type.value, expr.span)
        return expr

    def parse_expression(self, min_bp: BindingPower) -> Expression:
        """Parse an expression whose operators all bind tighter than min_bp."""
        token = self.tokens.next()
        if token is None:
            raise create_nothing_to_parse_error(self.tokens.end_location)
        if token.type == TokenType.INVALID:
            raise create_invalid_token_error(token)

        left = self._parse_prefix(token)

        while self._next_binding_power() > min_bp:
            operator_token = self.tokens.next()
            left = self._parse_infix(left, operator_token)

        return left

    def binding_power(self, token: Optional[Token]) -> BindingPower:
        """Binding power of a token; end of input binds least of all."""
        if token is None:
            return BindingPower.NONE
        return self.binding_powers[token.type]

    def _next_binding_power(self) -> BindingPower:
        return self.binding_power(self.tokens.peek())

    def _parse_prefix(self, token: Token) -> Expression:
        prefix_parser = self.prefix_parsers.get(token.type)
        if prefix_parser is None:
            raise create_invalid_prefix_error(token)
        return prefix_parser(token)

    def _parse_infix(self, left: Expression, token: Token) -> Expression:
        infix_parser = self.infix_parsers.get(token.type)
        if infix_parser is None:
            raise create_invalid_infix_error(token)
        return infix_parser(left, token)

    # Prefix parsers

    def _parse_number(self, token: Token) -> Value:
        return Value(token.value, SourceSpan(token.location, token.location))

    def _parse_grouping(self, open_token: Token) -> Expression:
        """Parse '(' expr ')'. The parentheses leave no node behind."""
        expr = self.parse_expression(BindingPower.GROUPING)

        close_token = self.tokens.next()
        if close_token is None or close_token.type != TokenType.RIGHT_PAREN:
            raise create_unmatched_left_paren_error(
                open_token, close_token, self.tokens.end_location
            )
        return expr

    def _parse_negation(self, minus_token: Token) -> BinaryOp:
        """Unary minus binds like binary '+'/'-', so -2*3 is -(2*3)."""
        operand = self.parse_expression(BindingPower.TERM)
        return negate(operand, SourceSpan(minus_token.location, _span_end(operand, minus_token)))

    # Infix parsers

    def _parse_binary(self, left: Expression, operator_token: Token) -> BinaryOp:
        """
        Parse the right operand at the operator's own binding power.

        Recursing at the same (not a higher) power stops the right operand
        at the next operator of equal precedence, which folds chains
        left to right: 1 - 2 - 3 is (1 - 2) - 3.
        """
        bp = self.binding_power(operator_token)
        right = self.parse_expression(bp)

        start = left.span.start if left.span else operator_token.location
        span = SourceSpan(start, _span_end(right, operator_token))
        return BinaryOp(operator_token.operator, left, right, span)

    def _parse_unmatched_right_paren(self, left: Expression, token: Token) -> Expression:
        raise create_unmatched_right_paren_error(token)


def _span_end(expr: Expression, fallback: Token):
    return expr.span.end if expr.span else fallback.location


def parse(tokens: Union[TokenStream, Iterable[Token]]) -> Expression:
    """
    Convenience function to parse a token sequence.

    Raises:
        ParseError: If parsing fails
    """
    return Parser(tokens).parse()


def parse_string(source: str, filename: str = "<string>") -> Expression:
    """
    Convenience function to parse a source string.

    Args:
        source: Expression text
        filename: Filename for error reporting

    Returns:
        Expression AST

    Raises:
        ParseError: If parsing fails
    """
    return Parser(tokenize_string(source, filename)).parse()
