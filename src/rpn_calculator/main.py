"""
Command-line entrypoint for the RPN calculator.

This script:
- Starts an interactive read-print loop when called without a file
- Evaluates every line of a text file or archive when one is given
- Prints help and versioning information on request
"""

import argparse
import sys
from typing import List, Literal, Optional

from pydantic import BaseModel, FilePath, ValidationError

from rpn_calculator.cli.loader import ExpressionFileLoader
from rpn_calculator.cli.session import CalculatorSession
from rpn_calculator.common.logger import configure_logging, logger

__version__ = "1.0.0"

DESCRIPTION = "An interactive Reverse Polish Notation calculator."

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class CliArgs(BaseModel):
    """
    Pydantic model used to validate CLI arguments.

    Attributes
    ----------
    file_path : Optional[FilePath]
        File or archive of postfix expressions; None starts the interactive loop.
    prompt : str
        Prompt shown before each interactive line.
    log_level : LogLevel
        Level of the package logger.
    """

    file_path: Optional[FilePath] = None
    prompt: str = "> "
    log_level: LogLevel = "WARNING"


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argument parser.

    :return: Configured parser
    :rtype: argparse.ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="rpn-calculator",
        description=DESCRIPTION,
        epilog="Enter expressions such as '3 4 + 2 *'. Type 'quit' or press Ctrl-D to leave.",
    )

    parser.add_argument(
        "file_path",
        nargs="?",
        help="Text file (.txt) or archive (.zip, .tar.xz, .7z) of expressions, one per line",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"{DESCRIPTION}\n\n%(prog)s {__version__}",
    )
    parser.add_argument(
        "--prompt",
        default="> ",
        help="Prompt shown before each interactive line (default: '%(default)s')",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        help="Logging level (default: %(default)s)",
    )
    return parser


def parse_args(argv: Optional[List[str]] = None) -> CliArgs:
    """
    Parse and validate command-line arguments.

    :param Optional[List[str]] argv: Arguments, defaults to ``sys.argv[1:]``

    :return: Validated CLI arguments
    :rtype: CliArgs
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        return CliArgs(file_path=args.file_path, prompt=args.prompt, log_level=args.log_level)
    except ValidationError as exc:
        parser.error(str(exc))


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the calculator.

    :param Optional[List[str]] argv: Arguments, defaults to ``sys.argv[1:]``

    :return: Exit status, 1 if any batch line failed to parse
    :rtype: int
    """
    cli_args = parse_args(argv)
    configure_logging(cli_args.log_level)
    session = CalculatorSession(prompt=cli_args.prompt)

    if cli_args.file_path is None:
        logger.info("🧮 Starting interactive session")
        session.run(sys.stdin, sys.stdout, sys.stderr)
        return 0

    try:
        lines = ExpressionFileLoader(file_path=cli_args.file_path).read_lines()
    except ValueError as exc:
        build_parser().error(str(exc))

    failures = session.process(lines, sys.stdout, sys.stderr)
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
