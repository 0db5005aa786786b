"""
End-to-end tests for the evaluator and the evaluate() entry points.

Author: xwest
"""

import unittest
import logging
import sys
import os
import threading

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from arithmetic import evaluate, try_evaluate, ParseError, ParseErrorKind
from arithmetic.lexer.tokens import Operator
from arithmetic.parser.ast_nodes import Value, BinaryOp, negate
from arithmetic.evaluator.evaluator import Evaluator, EvaluationResult


class TestEvaluate(unittest.TestCase):
    """Test cases for evaluating valid expressions."""

    def test_basic_eval(self):
        self.assertEqual(evaluate("42"), 42)
        self.assertEqual(evaluate("1 + 1"), 2)
        self.assertEqual(evaluate("2 * 3 + 1"), 7)
        self.assertEqual(evaluate("1 + 2 * 3"), 7)
        self.assertEqual(evaluate("6 * 10 + 2 - 7 * 3"), 41)

    def test_single_literals(self):
        for n in (0, 1, 7, 10, 999, 123456789):
            self.assertEqual(evaluate(str(n)), n)
        self.assertEqual(evaluate("007"), 7)

    def test_eval_with_parenthesis(self):
        self.assertEqual(evaluate("((42))"), 42)
        self.assertEqual(evaluate("(1 + 2) * 3"), 9)
        self.assertEqual(evaluate("(2 * 3) - (14 + 3*2) * ((4)) "), -74)

    def test_eval_with_prefix_minus(self):
        self.assertEqual(evaluate("-4"), -4)
        self.assertEqual(evaluate("-4 + 4"), 0)
        self.assertEqual(evaluate("1 + -4 * 2"), -7)
        self.assertEqual(evaluate("3*-4 "), -12)
        self.assertEqual(evaluate("--4"), 4)
        self.assertEqual(evaluate("-(2 - 5)"), 3)

    def test_subtraction_is_left_associative(self):
        self.assertEqual(evaluate("1 - 2 - 3"), -4)
        self.assertEqual(evaluate("10 - 4 + 3"), 9)

    def test_whitespace_is_insignificant(self):
        compact = "(2*3)-(14+3*2)*((4))"
        spaced = "  ( 2 * 3 )  -  ( 14 + 3 * 2 ) * ( ( 4 ) )  "
        self.assertEqual(evaluate(compact), evaluate(spaced))

    def test_no_overflow(self):
        """Results are exact; they never wrap at a machine word size."""
        big = 2 ** 64
        self.assertEqual(evaluate(f"{big} * {big}"), big * big)
        self.assertEqual(evaluate(f"-{big} - {big}"), -2 * big)

    def test_literals_past_int_string_limit(self):
        """Literals longer than int()'s 4300 digit default evaluate exactly."""
        digits = "1" * 5000
        self.assertEqual(evaluate(digits), 10 ** 5000 // 9)
        self.assertEqual(evaluate(f"{digits} - {digits}"), 0)
        self.assertTrue(try_evaluate(f"({digits}) * 9 + 1").is_ok())
        self.assertEqual(try_evaluate(f"({digits}) * 9 + 1").unwrap(), 10 ** 5000)

    def test_huge_results_are_logged(self):
        with self.assertLogs("arithmetic", level=logging.DEBUG) as logs:
            result = evaluate("-" + "9" * 5000)
        self.assertEqual(result, 1 - 10 ** 5000)
        self.assertTrue(any(line.endswith("-" + "9" * 5000) for line in logs.output))

    def test_long_chains(self):
        self.assertEqual(evaluate(" + ".join(["1"] * 5000)), 5000)
        self.assertEqual(evaluate(" - ".join(["1"] * 5000)), 1 - 4999)

    def test_repeated_calls_are_identical(self):
        source = "6 * 10 + 2 - 7 * 3"
        self.assertEqual({evaluate(source) for _ in range(10)}, {41})

    def test_concurrent_calls(self):
        results = []
        lock = threading.Lock()

        def worker():
            value = evaluate("(1 + 2) * 3 - -4")
            with lock:
                results.append(value)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(results, [13] * 8)


class TestEvaluateErrors(unittest.TestCase):
    """Malformed input produces the exact predicted error kind."""

    CASES = {
        "1 1": ParseErrorKind.INVALID_EXPRESSION,
        "(1": ParseErrorKind.UNMATCHED_LEFT_PARENTHESIS,
        "1 )": ParseErrorKind.UNMATCHED_RIGHT_PARENTHESIS,
        "+ 1": ParseErrorKind.INVALID_PREFIX,
        "= 1": ParseErrorKind.INVALID_TOKEN,
        "": ParseErrorKind.NOTHING_TO_PARSE,
        "2(3)": ParseErrorKind.INVALID_INFIX,
    }

    def test_evaluate_raises(self):
        for source, kind in self.CASES.items():
            with self.subTest(source=source):
                with self.assertRaises(ParseError) as ctx:
                    evaluate(source)
                self.assertIs(ctx.exception.kind, kind)

    def test_try_evaluate_returns_error(self):
        for source, kind in self.CASES.items():
            with self.subTest(source=source):
                result = try_evaluate(source)
                self.assertFalse(result.is_ok())
                self.assertTrue(result.has_errors())
                self.assertIsNone(result.value)
                self.assertIs(result.error.kind, kind)

    def test_unwrap_reraises(self):
        result = try_evaluate("(1")
        with self.assertRaises(ParseError):
            result.unwrap()

    def test_filename_in_error_location(self):
        with self.assertRaises(ParseError) as ctx:
            evaluate("1 1", filename="input.txt")
        self.assertEqual(str(ctx.exception.location), "input.txt:1:3")

    def test_failures_logged_at_debug(self):
        with self.assertLogs("arithmetic", level=logging.DEBUG) as logs:
            try_evaluate("+ 1")
        self.assertTrue(any("InvalidPrefix" in line for line in logs.output))
        self.assertTrue(all(line.startswith("DEBUG") for line in logs.output))


class TestTryEvaluate(unittest.TestCase):

    def test_success(self):
        result = try_evaluate("(1 + 2) * 3")
        self.assertEqual(result, EvaluationResult("(1 + 2) * 3", value=9))
        self.assertTrue(result.is_ok())
        self.assertFalse(result.has_errors())
        self.assertEqual(result.unwrap(), 9)


class TestEvaluator(unittest.TestCase):
    """Test cases for evaluating hand-built trees."""

    def setUp(self):
        self.evaluator = Evaluator()

    def test_value(self):
        self.assertEqual(self.evaluator.evaluate(Value(5)), 5)

    def test_operators(self):
        self.assertEqual(self.evaluator.evaluate(BinaryOp(Operator.ADD, Value(2), Value(3))), 5)
        self.assertEqual(self.evaluator.evaluate(BinaryOp(Operator.SUBTRACT, Value(2), Value(3))), -1)
        self.assertEqual(self.evaluator.evaluate(BinaryOp(Operator.MULTIPLY, Value(2), Value(3))), 6)

    def test_negation(self):
        self.assertEqual(self.evaluator.evaluate(negate(Value(8))), -8)

    def test_accept_uses_visitor(self):
        tree = BinaryOp(Operator.MULTIPLY, negate(Value(2)), Value(3))
        self.assertEqual(tree.accept(self.evaluator), -6)

    def test_rejects_non_expressions(self):
        with self.assertRaises(TypeError):
            self.evaluator.evaluate("1 + 2")

    def test_values_must_be_non_negative(self):
        with self.assertRaises(ValueError):
            Value(-1)


if __name__ == '__main__':
    unittest.main()
