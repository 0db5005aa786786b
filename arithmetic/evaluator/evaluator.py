"""
Tree-walking evaluator and the evaluate() entry point.

Evaluation of a well-formed tree cannot fail: there is no division and
Python integers never overflow, so the only failures the pipeline can
report are ParseErrors raised before evaluation starts.

Author: xwest
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from ..lexer.lexer import tokenize_string
from ..lexer.tokens import Operator, int_to_digits
from ..parser.ast_nodes import ASTVisitor, ASTNode, Value, BinaryOp
from ..parser.parser import Parser
from ..parser.errors import ParseError

logger = logging.getLogger(__name__)


@dataclass
class EvaluationResult:
    """Outcome of try_evaluate(): either a value or the parse error."""
    source: str
    value: Optional[int] = None
    error: Optional[ParseError] = None

    def is_ok(self) -> bool:
        """Check if evaluation produced a value."""
        return self.error is None

    def has_errors(self) -> bool:
        """Check if parsing failed."""
        return self.error is not None

    def unwrap(self) -> int:
        """Return the value, re-raising the parse error if there is one."""
        if self.error is not None:
            raise self.error
        return self.value


class Evaluator(ASTVisitor):
    """
    Reduces an expression tree to a signed integer.

    The walk is a post-order traversal with an explicit stack. Left
    associative chains such as 1 + 1 + ... + 1 produce trees as deep as
    the chain is long, and a recursive walk would hit Python's recursion
    limit after a few hundred terms.
    """

    def evaluate(self, node: ASTNode) -> int:
        results = []
        stack = [(node, False)]

        while stack:
            current, operands_done = stack.pop()

            if isinstance(current, Value):
                results.append(current.value)
            elif isinstance(current, BinaryOp):
                if operands_done:
                    right = results.pop()
                    left = results.pop()
                    results.append(self._apply(current.operator, left, right))
                else:
                    stack.append((current, True))
                    stack.append((current.right, False))
                    stack.append((current.left, False))
            else:
                raise TypeError(f"Cannot evaluate {type(current).__name__}")

        return results.pop()

    def visit(self, node: ASTNode) -> Any:
        return self.evaluate(node)

    @staticmethod
    def _apply(operator: Operator, left: int, right: int) -> int:
        if operator is Operator.ADD:
            return left + right
        elif operator is Operator.SUBTRACT:
            return left - right
        elif operator is Operator.MULTIPLY:
            return left * right
        raise TypeError(f"Unknown operator {operator!r}")


def evaluate(expression: str, filename: str = "<string>") -> int:
    """
    Evaluate an arithmetic expression.

    Args:
        expression: Text such as "(1 + 2) * -3"
        filename: Name used in error locations

    Returns:
        The integer value of the expression

    Raises:
        ParseError: If the text is not a valid expression
    """
    logger.debug("Evaluating %r", expression)
    ast = Parser(tokenize_string(expression, filename)).parse()
    result = Evaluator().evaluate(ast)
    if logger.isEnabledFor(logging.DEBUG):
        sign = "-" if result < 0 else ""
        logger.debug("%r evaluated to %s%s", expression, sign, int_to_digits(abs(result)))
    return result


def try_evaluate(expression: str, filename: str = "<string>") -> EvaluationResult:
    """
    Evaluate an arithmetic expression, returning parse errors as data.

    Returns:
        EvaluationResult holding either the value or the ParseError
    """
    try:
        value = evaluate(expression, filename)
    except ParseError as e:
        logger.debug("Rejected %r: %s", expression, e.kind.value)
        return EvaluationResult(expression, error=e)
    return EvaluationResult(expression, value=value)
