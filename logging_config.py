"""
Logging setup for the report generator.

The level comes from ``--log-level``, then ``LOG_LEVEL``, then INFO. Records
go to the console and, when REPORT_LOG_FILE is set, to that file as well.

What gets logged where:
- DEBUG: page flushes, layout checkpoints
- INFO: finished documents (pages, bytes) and stage timings
- WARNING: blocks taller than a page, drilldown tables without columns
- ERROR: invalid payloads and PDF generation failures
"""

import os
import logging
import argparse
from typing import Optional

VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR']
DEFAULT_LOG_LEVEL = 'INFO'
LOG_LEVEL_ENV_VAR = 'LOG_LEVEL'

STANDARD_LOG_FORMAT = '%(asctime)s - %(levelname)s - %(name)s - %(message)s'
# Errors also name the function and line that raised them
DETAILED_LOG_FORMAT = '%(asctime)s - %(levelname)s - %(name)s - %(funcName)s:%(lineno)d - %(message)s'

# Never more verbose than WARNING
NOISY_LIBRARY_LOGGERS = ('reportlab', 'PIL')


def get_log_level(cli_level: Optional[str] = None) -> int:
    """
    Resolve the numeric log level.

    Raises:
        ValueError: If the requested level is not one of VALID_LOG_LEVELS.
    """
    level_str = (cli_level or os.getenv(LOG_LEVEL_ENV_VAR) or DEFAULT_LOG_LEVEL).strip().upper()
    if level_str not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Invalid log level: '{level_str}'. "
            f"Valid levels are: {', '.join(VALID_LOG_LEVELS)}"
        )
    return getattr(logging, level_str)


class DetailedErrorFormatter(logging.Formatter):
    """Switches to DETAILED_LOG_FORMAT for ERROR and above."""

    def __init__(
        self,
        standard_fmt: str = STANDARD_LOG_FORMAT,
        detailed_fmt: str = DETAILED_LOG_FORMAT,
        datefmt: Optional[str] = None
    ):
        super().__init__(fmt=standard_fmt, datefmt=datefmt)
        self.standard_fmt = standard_fmt
        self.detailed_fmt = detailed_fmt

    def format(self, record: logging.LogRecord) -> str:
        self._style._fmt = self.detailed_fmt if record.levelno >= logging.ERROR else self.standard_fmt
        return super().format(record)


def configure_logging(
    log_file: Optional[str] = None,
    log_level: Optional[str] = None,
) -> logging.Logger:
    """
    Replace the root logger's handlers with a console handler and, if
    ``log_file`` is given, a file handler. The log directory is created
    when missing.

    Raises:
        ValueError: If the resolved log level is invalid.
    """
    level = get_log_level(log_level)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(level)

    formatter = DetailedErrorFormatter()
    handlers = [logging.StreamHandler()]
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    for name in NOISY_LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logging.debug(f"Logging configured at {logging.getLevelName(level)}")
    return root_logger


def add_log_level_argument(parser: argparse.ArgumentParser) -> None:
    """Add a case-insensitive ``--log-level`` option."""
    parser.add_argument(
        '--log-level',
        type=str.upper,
        choices=VALID_LOG_LEVELS,
        default=None,
        metavar='LEVEL',
        help=(
            f"One of {', '.join(VALID_LOG_LEVELS)}; overrides {LOG_LEVEL_ENV_VAR}. "
            f"Default: {DEFAULT_LOG_LEVEL}"
        )
    )
