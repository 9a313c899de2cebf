"""Test the shared package logger."""
import logging

import pytest

from rpn_calculator.common.logger import configure_logging, logger


@pytest.fixture
def restore_level():
    """Put the package logger back to its default level after the test."""
    yield
    configure_logging("WARNING")


def test_configure_logging_attaches_one_handler(restore_level) -> None:
    """Repeated configuration only changes the level."""
    configure_logging("INFO")
    configure_logging("DEBUG")
    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG


def test_handler_writes_to_current_stderr(restore_level, capsys) -> None:
    """Records go to the stderr stream active when they are emitted."""
    configure_logging("INFO")
    logger.info("🧮 hello from the calculator")

    err = capsys.readouterr().err
    assert "[INFO] rpn_calculator: 🧮 hello from the calculator" in err


def test_level_filters_records(restore_level, capsys) -> None:
    """Records below the configured level are dropped."""
    configure_logging("WARNING")
    logger.info("hidden")
    assert "hidden" not in capsys.readouterr().err
