"""Parse postfix arithmetic expressions into expression trees."""
import re
from typing import List

from rpn_calculator.common.models import BinaryOp, Expression, Number
from rpn_calculator.common.operations import Operation

# Decimal float literals, infinities and NaN; ASCII only, no digit separators
NUMBER_PATTERN = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?|inf|infinity|nan)",
    re.ASCII | re.IGNORECASE,
)


class ExpressionParseError(ValueError):
    """
    Raised when a line cannot be reduced to a single expression tree.

    :param str source: The full text that failed to parse
    :param int remaining: Number of entries left on the parse stack at the point of failure
    """

    def __init__(self, source: str, remaining: int) -> None:
        self.source = source
        self.remaining = remaining
        super().__init__(
            f"Parsing failed for expression '{source}': {remaining} token(s) left on the stack."
        )


class ExpressionParser:
    """
    Parse Reverse Polish Notation (RPN) expressions into expression trees.

    Design constraints:
        - No eval(), no dynamic code execution
        - Parsing never evaluates; numeric conditions such as division by
          zero only show up when the tree is evaluated

    Algorithm:
        1. Tokenize based on whitespace
        2. Push a Number leaf for each numeric token
        3. For each operator, pop the right operand, then the left one, and
           push the combined BinaryOp node
        4. Exactly one tree must remain once all tokens are consumed

    Examples:
        - RPN expression: 3 4 2 * +
        - Corresponding tree, rendered in infix notation: (3 + (4 * 2))

    """

    @staticmethod
    def tokenize(expr: str) -> List[str]:
        """
        Split a postfix expression into tokens.

        Tokens must be whitespace-separated (e.g., "3 4 2 * +").

        :param str expr: Postfix expression as a string

        :return: List of tokens
        :rtype: List[str]
        """
        return expr.split()

    @staticmethod
    def _is_number(token: str) -> bool:
        """
        Determine if a token represents a numeric value.

        Supports integers, floating-point numbers, exponents, ``inf``,
        ``infinity`` and ``nan``. Only ASCII digits are accepted, without
        ``_`` separators.

        :param str token: Token string

        :return: True if token can be converted to float, else False
        :rtype: bool
        """
        return NUMBER_PATTERN.fullmatch(token) is not None

    @staticmethod
    def parse(expr: str) -> Expression:
        """
        Build the expression tree for a postfix expression.

        Parsing stops at the first token that is neither a number nor an
        operator, or at the first operator with fewer than two operands.

        :param str expr: Postfix expression string

        :return: Root of the expression tree
        :rtype: Expression
        :raises ExpressionParseError: If the expression is malformed or incomplete
        """
        stack: List[Expression] = []

        for token in ExpressionParser.tokenize(expr):
            if ExpressionParser._is_number(token):
                stack.append(Number(value=float(token)))
                continue

            operation = Operation.from_token(token)
            if operation is None or len(stack) < 2:
                raise ExpressionParseError(expr, len(stack))

            # First pop is the right operand: "10 2 -" means 10 - 2
            right: Expression = stack.pop()
            left: Expression = stack.pop()
            stack.append(BinaryOp(operation=operation, left=left, right=right))

        if len(stack) != 1:
            raise ExpressionParseError(expr, len(stack))

        return stack[0]

    @staticmethod
    def evaluate(expr: str) -> float:
        """
        Parse and evaluate a postfix expression.

        :param str expr: Postfix expression string

        :return: Computed result as float
        :rtype: float
        :raises ExpressionParseError: If the expression is malformed or incomplete
        """
        return ExpressionParser.parse(expr).evaluate()
