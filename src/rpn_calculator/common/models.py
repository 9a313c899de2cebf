"""Pydantic models for expression trees and evaluation results."""
from decimal import Decimal
import math
from typing import List, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from rpn_calculator.common.operations import Operation


def format_number(value: float) -> str:
    """
    Render a float as a decimal string.

    Uses the shortest digits that round-trip to ``value``, written in
    positional notation: ``7`` rather than ``7.0``, ``0.0000001`` rather than
    ``1e-07`` and ``1e300`` as a one followed by 300 zeros.

    :param float value: Number to render

    :return: Decimal representation
    :rtype: str
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = format(Decimal(repr(value)), "f")
    if text.endswith(".0"):
        return text[:-2]
    return text


class Number(BaseModel):
    """Leaf of an expression tree holding a single scalar."""

    model_config = ConfigDict(frozen=True)

    value: float = Field(..., description="Scalar value of the leaf")

    def evaluate(self) -> float:
        """Return the scalar held by the leaf."""
        return self.value

    def infix_string(self) -> str:
        """Return the decimal rendering of the scalar."""
        return format_number(self.value)


class BinaryOp(BaseModel):
    """
    Internal node of an expression tree.

    Applies ``operation`` to the values of its ``left`` and ``right`` subtrees.
    Each node owns its children; trees never share nodes.
    """

    model_config = ConfigDict(frozen=True)

    operation: Operation = Field(..., description="Operator applied to the children")
    left: "Expression" = Field(..., description="Left operand subtree")
    right: "Expression" = Field(..., description="Right operand subtree")

    def evaluate(self) -> float:
        """
        Evaluate both subtrees and combine them.

        Walks the tree in post-order with an explicit stack, so arbitrarily
        deep trees evaluate without hitting the recursion limit. Division by
        zero follows IEEE-754 and yields ``inf`` or ``nan``.

        :return: Value of the subtree rooted at this node
        :rtype: float
        """
        values: List[float] = []
        # Entries are (node, children_done)
        pending: List[Tuple[Expression, bool]] = [(self, False)]
        while pending:
            node, children_done = pending.pop()
            if isinstance(node, Number):
                values.append(node.value)
            elif children_done:
                right = values.pop()
                left = values.pop()
                values.append(node.operation.apply(left, right))
            else:
                pending.append((node, True))
                pending.append((node.right, False))
                pending.append((node.left, False))
        return values[0]

    def infix_string(self) -> str:
        """
        Render the subtree in fully parenthesized infix notation.

        :return: String such as ``(3 + (4 * 2))``
        :rtype: str
        """
        parts: List[str] = []
        # Strings are emitted as-is, nodes are expanded in place
        pending: List[Union[str, Expression]] = [self]
        while pending:
            item = pending.pop()
            if isinstance(item, str):
                parts.append(item)
            elif isinstance(item, Number):
                parts.append(item.infix_string())
            else:
                pending.extend((")", item.right, f" {item.operation.symbol} ", item.left, "("))
        return "".join(parts)


Expression = Union[Number, BinaryOp]

BinaryOp.model_rebuild()


def evaluate(expr: Expression) -> float:
    """Evaluate an expression tree."""
    return expr.evaluate()


def to_infix_string(expr: Expression) -> str:
    """Render an expression tree in fully parenthesized infix notation."""
    return expr.infix_string()


class EvaluationResult(BaseModel):
    """Represents one successfully evaluated input line."""

    model_config = ConfigDict(frozen=True)

    expression: str = Field(..., description="Original postfix expression")
    infix: str = Field(..., description="Fully parenthesized infix rendering")
    result: float = Field(..., description="Evaluated numeric result of the expression")

    def __str__(self) -> str:
        return f"{self.infix} = {format_number(self.result)}"
