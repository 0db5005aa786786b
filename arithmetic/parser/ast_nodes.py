"""
Abstract Syntax Tree node definitions for arithmetic expressions.

The tree has only two node kinds: integer leaves (Value) and binary
operations (BinaryOp). Unary minus is represented as a subtraction
from zero, so it needs no node of its own.

Author: xwest
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional, Union
from dataclasses import dataclass
from enum import Enum

from ..lexer.tokens import SourceLocation, Operator, int_to_digits


class ASTNodeType(Enum):
    """Enumeration of all AST node types."""
    VALUE = "Value"
    BINARY_OP = "BinaryOp"


@dataclass
class SourceSpan:
    """Represents a span of source code (start and end locations)."""
    start: SourceLocation
    end: SourceLocation

    def __str__(self) -> str:
        if self.start.filename == self.end.filename:
            return f"{self.start.filename}:{self.start.line}:{self.start.column}-{self.end.line}:{self.end.column}"
        return f"{self.start}-{self.end}"


class ASTVisitor(ABC):
    """Abstract visitor interface for traversing AST nodes."""

    @abstractmethod
    def visit(self, node: 'ASTNode') -> Any:
        """Visit a generic AST node."""
        pass


class ASTNode(ABC):
    """
    Base class for all AST nodes.

    Equality is structural: two nodes are equal when they have the same
    kind, the same payload and equal children. Spans and parents are
    ignored, so parsing the same text twice gives equal trees.

    Left associative chains build trees as deep as the chain is long, so
    every whole-tree walk here (equality, hashing, rendering) uses an
    explicit stack instead of recursion.
    """

    def __init__(self, node_type: ASTNodeType, span: Optional[SourceSpan] = None):
        self.node_type = node_type
        self.span = span
        self.parent: Optional['ASTNode'] = None

    @abstractmethod
    def accept(self, visitor: ASTVisitor) -> Any:
        """Accept a visitor (visitor pattern)."""
        pass

    @abstractmethod
    def children(self) -> List['ASTNode']:
        """Get all child nodes."""
        pass

    @abstractmethod
    def _label(self) -> Any:
        """This node's own payload, without its children."""
        pass

    @abstractmethod
    def _source_parts(self) -> List[Union[str, 'ASTNode']]:
        """Text pieces and child nodes that make up to_source()."""
        pass

    @abstractmethod
    def _repr_parts(self) -> List[Union[str, 'ASTNode']]:
        """Text pieces and child nodes that make up repr()."""
        pass

    def _key(self) -> tuple:
        """Pre-order sequence of labels; node arity is fixed by label type."""
        labels = []
        stack = [self]
        while stack:
            node = stack.pop()
            labels.append(node._label())
            stack.extend(reversed(node.children()))
        return tuple(labels)

    def _render(self, parts_of: Callable[['ASTNode'], List[Union[str, 'ASTNode']]]) -> str:
        pieces = []
        stack = [self]
        while stack:
            item = stack.pop()
            if isinstance(item, str):
                pieces.append(item)
            else:
                stack.extend(reversed(parts_of(item)))
        return "".join(pieces)

    def to_source(self) -> str:
        """Render the subtree as fully parenthesised infix text."""
        return self._render(lambda node: node._source_parts())

    def set_parent(self, parent: 'ASTNode'):
        """Attach this node to its (single) owning parent."""
        if self.parent is not None and self.parent is not parent:
            raise ValueError(f"{self!r} already belongs to another node")
        self.parent = parent

    def __str__(self) -> str:
        return self.to_source()

    def __repr__(self) -> str:
        return self._render(lambda node: node._repr_parts())

    def __hash__(self) -> int:
        return hash(self._key())

    def __eq__(self, other) -> bool:
        if not isinstance(other, ASTNode):
            return NotImplemented
        return self._key() == other._key()


class Expression(ASTNode):
    """Base class for expressions."""
    pass


class Value(Expression):
    """Integer literal leaf."""
    value: int

    def __init__(self, value: int, span: Optional[SourceSpan] = None):
        if value < 0:
            raise ValueError("Value nodes hold non-negative integers")
        super().__init__(ASTNodeType.VALUE, span)
        self.value = value

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit(self)

    def children(self) -> List[ASTNode]:
        return []

    def _label(self) -> int:
        return self.value

    def _source_parts(self) -> List[Union[str, ASTNode]]:
        return [int_to_digits(self.value)]

    def _repr_parts(self) -> List[Union[str, ASTNode]]:
        return [f"Value({int_to_digits(self.value)})"]


class BinaryOp(Expression):
    """Binary operation expression."""
    operator: Operator
    left: Expression
    right: Expression

    def __init__(self, operator: Operator, left: Expression, right: Expression,
                 span: Optional[SourceSpan] = None):
        super().__init__(ASTNodeType.BINARY_OP, span)
        self.operator = operator
        self.left = left
        self.right = right

        left.set_parent(self)
        right.set_parent(self)

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit(self)

    def children(self) -> List[ASTNode]:
        return [self.left, self.right]

    def _label(self) -> Operator:
        return self.operator

    def _source_parts(self) -> List[Union[str, ASTNode]]:
        return ["(", self.left, f" {self.operator} ", self.right, ")"]

    def _repr_parts(self) -> List[Union[str, ASTNode]]:
        return [f"BinaryOp({self.operator.name}, ", self.left, ", ", self.right, ")"]


def negate(operand: Expression, span: Optional[SourceSpan] = None) -> BinaryOp:
    """Build the tree for unary minus: 0 - operand."""
    return BinaryOp(Operator.SUBTRACT, Value(0), operand, span)


# Alias for the main AST type
AST = Expression
