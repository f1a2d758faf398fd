"""Tests for logger setup."""

import logging

import pytest
from textual.logging import TextualHandler

from proctop.log_config import LOGGER_NAME, setup_logger


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def test_console_handler_on_stderr():
    """Test plain mode logs warnings to stderr without propagating."""
    logger = setup_logger()

    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.StreamHandler)
    assert logger.handlers[0].level == logging.WARNING
    assert logger.propagate is False


def test_tui_uses_textual_handler():
    """Test TUI mode keeps records off the painted screen."""
    logger = setup_logger(tui=True)

    assert isinstance(logger.handlers[0], TextualHandler)


def test_repeated_setup_does_not_duplicate():
    """Test calling setup twice leaves one console handler."""
    setup_logger()
    logger = setup_logger()

    assert len(logger.handlers) == 1


def test_log_file_receives_debug(tmp_path):
    """Test module loggers write debug records to the log file."""
    log_file = tmp_path / "logs" / "proctop.log"
    setup_logger(log_file)

    logging.getLogger("proctop.engine").debug("counter regression for pid 5")
    for handler in logging.getLogger(LOGGER_NAME).handlers:
        handler.flush()

    assert "counter regression for pid 5" in log_file.read_text(encoding="utf-8")
