"""Binary arithmetic operations supported by the calculator."""
from collections.abc import Callable
from enum import Enum
import math
import operator
from typing import Optional


def _ieee_truediv(lhs: float, rhs: float) -> float:
    """
    Divide two floats with IEEE-754 semantics.

    Python raises ZeroDivisionError on ``x / 0.0``; IEEE-754 returns a signed
    infinity, or NaN when the dividend is zero or NaN.

    :param float lhs: Dividend
    :param float rhs: Divisor

    :return: Quotient
    :rtype: float
    """
    if rhs != 0.0:
        return lhs / rhs
    if lhs == 0.0 or math.isnan(lhs):
        return math.nan
    return math.copysign(math.inf, lhs) * math.copysign(1.0, rhs)


class Operation(str, Enum):
    """Closed set of binary operators, valued by their textual symbol."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"

    @property
    def symbol(self) -> str:
        """Canonical single-character symbol of the operation."""
        return self.value

    def apply(self, lhs: float, rhs: float) -> float:
        """
        Combine two operands.

        :param float lhs: Left operand
        :param float rhs: Right operand

        :return: Result of ``lhs <op> rhs``
        :rtype: float
        """
        return _FUNCTIONS[self](lhs, rhs)

    @classmethod
    def from_token(cls, token: str) -> Optional["Operation"]:
        """
        Look up the operation for a token.

        :param str token: Candidate operator symbol

        :return: Matching operation, or None if the token is not an operator
        :rtype: Optional[Operation]
        """
        for op in cls:
            if op.value == token:
                return op
        return None


# Mapping of operations to the functions combining their operands
_FUNCTIONS: dict[Operation, Callable[[float, float], float]] = {
    Operation.ADD: operator.add,
    Operation.SUBTRACT: operator.sub,
    Operation.MULTIPLY: operator.mul,
    Operation.DIVIDE: _ieee_truediv,
}
