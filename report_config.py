"""
Report Generator Configuration

Runtime settings read from the environment, with a ``.env`` file in the
working directory loaded first via python-dotenv. Layout geometry is not
configurable here; it lives in ``constants``.

Environment variables:
- REPORT_OUTPUT_DIR: Directory for generated PDFs (default: reports)
- REPORT_LOG_FILE: Optional log file path
- REPORT_AUTHOR: Optional PDF author metadata
- REPORT_PDF_COMPRESS: Compress page streams, true/false (default: true)

Usage:
    from report_config import load_report_config

    config = load_report_config()
    path = config.output_path_for("Acme Dental")
"""

import logging
import os
import re
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# Get logger for this module
logger = logging.getLogger(__name__)

OUTPUT_DIR_ENV_VAR = "REPORT_OUTPUT_DIR"
LOG_FILE_ENV_VAR = "REPORT_LOG_FILE"
AUTHOR_ENV_VAR = "REPORT_AUTHOR"
COMPRESS_ENV_VAR = "REPORT_PDF_COMPRESS"

DEFAULT_OUTPUT_DIR = "reports"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class ReportConfig:
    """
    Settings shared by the report builders and the command line.

    Attributes:
        output_dir: Directory where generated PDFs are written
        log_file: Optional log file path
        author: Optional PDF author metadata
        compress: Whether PDF page streams are compressed
    """
    output_dir: str = DEFAULT_OUTPUT_DIR
    log_file: Optional[str] = None
    author: Optional[str] = None
    compress: bool = True

    def output_path_for(self, client_name: str, suffix: str = "report") -> str:
        """Default output file path for a client, e.g. ``reports/acme-dental-report.pdf``."""
        return os.path.join(self.output_dir, f"{slugify(client_name)}-{suffix}.pdf")


def slugify(value: str) -> str:
    """Lower-case file name stem made of letters, digits and single hyphens."""
    slug = re.sub(r"[^a-z0-9]+", "-", (value or "").lower()).strip("-")
    return slug or "report"


def parse_bool(value: Optional[str], default: bool) -> bool:
    """
    Interpret an environment flag.

    Raises:
        ValueError: If the value is set but not a recognised boolean
    """
    if value is None or not value.strip():
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean value: '{value}'")


def load_report_config(load_env: bool = True, env_file: Optional[str] = None) -> ReportConfig:
    """
    Build a ReportConfig from the environment.

    Args:
        load_env: Whether to load variables from a .env file first.
        env_file: Explicit .env path; searched for when omitted.

    Raises:
        ValueError: If REPORT_PDF_COMPRESS holds an invalid value
    """
    if load_env:
        load_dotenv(env_file)

    try:
        compress = parse_bool(os.getenv(COMPRESS_ENV_VAR), default=True)
    except ValueError as e:
        error_msg = f"{COMPRESS_ENV_VAR} must be true or false: {e}"
        logger.error(error_msg)
        raise ValueError(error_msg) from e

    config = ReportConfig(
        output_dir=os.getenv(OUTPUT_DIR_ENV_VAR) or DEFAULT_OUTPUT_DIR,
        log_file=os.getenv(LOG_FILE_ENV_VAR) or None,
        author=os.getenv(AUTHOR_ENV_VAR) or None,
        compress=compress,
    )
    logger.debug(f"Loaded report configuration: {config}")
    return config
