"""
Arithmetic Evaluator Package

Reduces expression trees to integers and provides the evaluate() and
try_evaluate() entry points that run the whole lexer -> parser ->
evaluator pipeline.

Author: xwest
"""

from .evaluator import Evaluator, EvaluationResult, evaluate, try_evaluate

__all__ = [
    "Evaluator",
    "EvaluationResult",
    "evaluate",
    "try_evaluate",
]
