"""Read-print loop evaluating postfix expressions line by line."""
from typing import IO, Iterable

from pydantic import BaseModel, ConfigDict, Field

from rpn_calculator.common.logger import logger
from rpn_calculator.common.models import EvaluationResult
from rpn_calculator.common.parser import ExpressionParseError, ExpressionParser

# Inputs that end an interactive session
QUIT_COMMANDS = frozenset({"quit", "exit"})


class CalculatorSession(BaseModel):
    """
    Evaluate postfix expressions and print them next to their infix rendering.

    Lifecycle:
        - Reads one line at a time
        - Prints ``<infix> = <result>`` for each valid expression
        - Reports malformed lines as parse errors and moves on to the next one
    """

    # Make the Pydantic instance immutable (read-only)
    model_config = ConfigDict(frozen=True)

    prompt: str = Field(default="> ", description="Prompt written before each interactive line")

    @staticmethod
    def evaluate_line(line: str) -> EvaluationResult:
        """
        Parse and evaluate a single postfix expression.

        :param str line: Postfix expression

        :return: Infix rendering and value of the expression
        :rtype: EvaluationResult
        :raises ExpressionParseError: If the line is not a well-formed expression
        """
        expr = ExpressionParser.parse(line)
        return EvaluationResult(expression=line, infix=expr.infix_string(), result=expr.evaluate())

    def process(self, lines: Iterable[str], out: IO[str], err: IO[str]) -> int:
        """
        Evaluate every non-blank line and write results or errors.

        Lines are parsed verbatim, minus their line terminator, so parse
        errors quote the input exactly as it was given.

        :param Iterable[str] lines: Expressions to evaluate
        :param IO[str] out: Stream receiving results
        :param IO[str] err: Stream receiving parse errors

        :return: Number of lines that failed to parse
        :rtype: int
        """
        failures = 0
        for line_number, line in enumerate(lines, start=1):
            line = line.rstrip("\r\n")
            if not line.strip():
                continue
            if not self._handle(line, line_number, out, err):
                failures += 1
        return failures

    def run(self, stdin: IO[str], out: IO[str], err: IO[str]) -> int:
        """
        Run the interactive loop until end of input or a quit command.

        The prompt is only written when ``stdin`` is a terminal.

        :param IO[str] stdin: Stream providing expressions
        :param IO[str] out: Stream receiving prompts and results
        :param IO[str] err: Stream receiving parse errors

        :return: Number of lines that failed to parse
        :rtype: int
        """
        interactive = stdin.isatty()
        failures = 0
        line_number = 0

        while True:
            if interactive:
                out.write(self.prompt)
                out.flush()

            raw = stdin.readline()
            if not raw:
                # End of input
                if interactive:
                    out.write("\n")
                break

            line_number += 1
            line = raw.rstrip("\r\n")
            if not line.strip():
                continue
            if line.strip().lower() in QUIT_COMMANDS:
                break
            if not self._handle(line, line_number, out, err):
                failures += 1

        logger.info("🧮 Session finished after %d line(s), %d failure(s)", line_number, failures)
        return failures

    def _handle(self, line: str, line_number: int, out: IO[str], err: IO[str]) -> bool:
        """
        Evaluate one line and write its outcome.

        :return: True if the line was evaluated, False if it failed to parse
        :rtype: bool
        """
        try:
            result = self.evaluate_line(line)
        except ExpressionParseError as exc:
            logger.info("❌ Line %d failed to parse: %r (%d left on the stack)", line_number, line, exc.remaining)
            err.write(f"parse error: {exc}\n")
            err.flush()
            return False

        logger.info("✅ Line %d: %r -> %s", line_number, result.expression, result)
        out.write(f"{result}\n")
        out.flush()
        return True
