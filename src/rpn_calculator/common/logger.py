"""Shared logger for the calculator package."""
import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger = logging.getLogger("rpn_calculator")


class _StderrHandler(logging.Handler):
    """Handler writing to whatever ``sys.stderr`` is at emit time."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            sys.stderr.write(self.format(record) + "\n")
            sys.stderr.flush()
        except Exception:
            self.handleError(record)


def configure_logging(level: str = "WARNING") -> None:
    """
    Attach a stderr handler to the package logger and set its level.

    Calling it again only updates the level.

    :param str level: Logging level name (e.g. "INFO", "DEBUG")
    """
    if not logger.handlers:
        handler = _StderrHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level)
