"""
Report PDF command line.

Reads a report payload (JSON) and writes the rendered PDF.

Usage:
    generate-report payload.json
    generate-report payload.json --output out/acme.pdf --log-level DEBUG
    generate-report drilldown.json --drilldown

Without --output the file is written to REPORT_OUTPUT_DIR as
``<client-slug>-report.pdf`` (``<title-slug>-drilldown.pdf`` for drilldown
tables). Exit code is 0 on success and 1 on invalid input or a failed
generation.
"""

import argparse
import json
import logging
import os
from typing import List, Optional

from logging_config import add_log_level_argument, configure_logging
from pdf_sink import PdfGenerationError
from performance_timing import timed_function
from report_builder import create_drilldown_pdf, create_report_pdf
from report_config import ReportConfig, load_report_config
from report_models import DrilldownTable, ReportPayload

# Logger will be configured in main() after parsing args
logger: logging.Logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate a report PDF from a JSON payload")
    parser.add_argument("payload", help="Path to the JSON payload")
    parser.add_argument("--output", "-o", default=None, help="Output PDF path (default: REPORT_OUTPUT_DIR)")
    parser.add_argument("--drilldown", action="store_true",
                        help="Treat the payload as a drilldown table (title, columns, rows)")
    add_log_level_argument(parser)
    return parser


def load_payload(path: str) -> dict:
    """
    Read and decode a JSON payload file.

    Raises:
        ValueError: If the file cannot be read or is not valid JSON
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise ValueError(f"Cannot read payload '{path}': {e}") from e
    except json.JSONDecodeError as e:
        raise ValueError(f"Payload '{path}' is not valid JSON: {e}") from e


@timed_function("report_write")
def write_pdf(path: str, data: bytes) -> None:
    out_dir = os.path.dirname(path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    with open(path, "wb") as f:
        f.write(data)


def generate(payload_path: str, output: Optional[str], drilldown: bool, config: ReportConfig) -> str:
    """
    Build the requested PDF and write it to disk.

    Returns:
        Path of the written PDF

    Raises:
        ValueError: If the payload is invalid
        PdfGenerationError: If rendering fails
    """
    data = load_payload(payload_path)
    if drilldown:
        table = DrilldownTable.from_dict(data)
        pdf_bytes = create_drilldown_pdf(table, config)
        path = output or config.output_path_for(table.title or "drilldown", suffix="drilldown")
    else:
        payload = ReportPayload.from_dict(data)
        pdf_bytes = create_report_pdf(payload, config)
        path = output or config.output_path_for(payload.client_name)
    write_pdf(path, pdf_bytes)
    return path


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_report_config()
        configure_logging(log_file=config.log_file, log_level=args.log_level)
    except ValueError as e:
        # Logging is not configured yet
        logging.basicConfig(level=logging.ERROR)
        logger.error(f"Invalid configuration: {e}")
        return 1

    try:
        path = generate(args.payload, args.output, args.drilldown, config)
    except ValueError as e:
        logger.error(f"Invalid payload: {e}")
        return 1
    except PdfGenerationError as e:
        logger.error(f"PDF generation failed: {e}", exc_info=True)
        return 1
    except OSError as e:
        logger.error(f"Could not write PDF: {e}", exc_info=True)
        return 1

    logger.info(f"Report written to {path}")
    return 0


if __name__ == "__main__":
    exit(main())
