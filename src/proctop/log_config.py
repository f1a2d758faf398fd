"""
Logging configuration for proctop.

The live table owns the terminal, so in TUI mode records go to the Textual
devtools console instead of stderr.
"""

import logging
import sys
from pathlib import Path

from textual.logging import TextualHandler

LOGGER_NAME = "proctop"


def setup_logger(
    log_file: Path | None = None,
    tui: bool = False,
    level: int = logging.WARNING,
) -> logging.Logger:
    """
    Configure and return the package logger.

    Args:
        log_file: Optional file receiving DEBUG output.
        tui: Route console records through Textual rather than stderr.
        level: Console level (default: WARNING).

    Returns:
        Configured ``proctop`` logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    # Remove existing handlers to avoid duplicates
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler: logging.Handler
    if tui:
        console_handler = TextualHandler()
    else:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(fmt="[%(levelname)s] %(message)s"))
    console_handler.setLevel(level)
    logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger
