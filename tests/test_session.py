"""Test class CalculatorSession."""
import io
import logging

import pytest

from rpn_calculator.cli.session import CalculatorSession
from rpn_calculator.common.parser import ExpressionParseError


class FakeTerminal(io.StringIO):
    """StringIO reporting itself as an interactive terminal."""

    def isatty(self) -> bool:
        return True


def test_evaluate_line() -> None:
    """evaluate_line returns the infix rendering and the value."""
    result = CalculatorSession.evaluate_line("10 2 -")
    assert result.expression == "10 2 -"
    assert result.infix == "(10 - 2)"
    assert result.result == 8.0


def test_evaluate_line_invalid() -> None:
    """evaluate_line propagates parse errors."""
    with pytest.raises(ExpressionParseError):
        CalculatorSession.evaluate_line("1 2")


def test_process_writes_results_and_errors() -> None:
    """process prints results to out and parse errors to err."""
    out, err = io.StringIO(), io.StringIO()
    failures = CalculatorSession().process(["3 4 +", "", "1 foo +", "5 0 /"], out, err)

    assert failures == 1
    assert out.getvalue() == "(3 + 4) = 7\n(5 / 0) = inf\n"
    assert err.getvalue() == (
        "parse error: Parsing failed for expression '1 foo +': 1 token(s) left on the stack.\n"
    )


def test_run_non_interactive_has_no_prompt() -> None:
    """Piped input is evaluated without writing prompts."""
    stdin = io.StringIO("3 4 +\n\n1 2\n2 3 *\n")
    out, err = io.StringIO(), io.StringIO()

    failures = CalculatorSession().run(stdin, out, err)

    assert failures == 1
    assert out.getvalue() == "(3 + 4) = 7\n(2 * 3) = 6\n"
    assert "2 token(s) left on the stack" in err.getvalue()


def test_run_interactive_writes_prompt() -> None:
    """A terminal gets a prompt before each line and a newline at end of input."""
    stdin = FakeTerminal("3 4 +\n")
    out, err = io.StringIO(), io.StringIO()

    CalculatorSession(prompt="rpn> ").run(stdin, out, err)

    assert out.getvalue() == "rpn> (3 + 4) = 7\nrpn> \n"
    assert err.getvalue() == ""


@pytest.mark.parametrize("command", ["quit", "exit", "QUIT"])
def test_run_stops_on_quit(command: str) -> None:
    """Quit commands end the session before later lines are read."""
    stdin = io.StringIO(f"1 1 +\n{command}\n2 2 +\n")
    out, err = io.StringIO(), io.StringIO()

    CalculatorSession().run(stdin, out, err)

    assert out.getvalue() == "(1 + 1) = 2\n"


def test_failures_are_logged(caplog) -> None:
    """Each failed line is logged with its stack depth."""
    caplog.set_level(logging.INFO, logger="rpn_calculator")
    CalculatorSession().process(["+"], io.StringIO(), io.StringIO())
    assert "0 left on the stack" in caplog.text


def test_parse_error_quotes_line_verbatim() -> None:
    """Surrounding whitespace is kept in the reported source, only the line terminator is dropped."""
    stdin = io.StringIO("  1 2 \r\n")
    out, err = io.StringIO(), io.StringIO()

    CalculatorSession().run(stdin, out, err)

    assert err.getvalue() == (
        "parse error: Parsing failed for expression '  1 2 ': 2 token(s) left on the stack.\n"
    )


def test_process_keeps_surrounding_whitespace() -> None:
    """Batch lines are parsed as given."""
    err = io.StringIO()
    CalculatorSession().process(["\t3 +  \n"], io.StringIO(), err)
    assert "expression '\t3 +  '" in err.getvalue()


def test_process_handles_very_long_lines() -> None:
    """A line with thousands of operators is evaluated instead of crashing the loop."""
    out, err = io.StringIO(), io.StringIO()

    failures = CalculatorSession().process(["1 " + "1 + " * 10_000, "2 3 *"], out, err)

    assert failures == 0
    lines = out.getvalue().splitlines()
    assert lines[0].endswith(" = 10001")
    assert lines[1] == "(2 * 3) = 6"


def test_results_are_logged_with_source(caplog) -> None:
    """Each evaluated line is logged with its original postfix text."""
    caplog.set_level(logging.INFO, logger="rpn_calculator")
    CalculatorSession().process(["3 4 +"], io.StringIO(), io.StringIO())
    assert "'3 4 +' -> (3 + 4) = 7" in caplog.text
