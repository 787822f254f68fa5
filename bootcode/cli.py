#!/usr/bin/env python3
"""
Command-line entry point: load a bootcode program, report the accumulator
at the first repeated instruction, then repair the program and report the
accumulator of the repaired run.

Usage:
    bootcode input.txt
    bootcode input.txt --format yaml --output report.yaml
"""

import argparse
import os
import sys
from typing import List, Optional

import structlog

from .core.computer import Computer
from .errors import BootcodeError
from .exporters import FORMATS, export_report
from .logging_config import configure_logging
from .parsing.assembler import load_program
from .repair.search import diagnose

DEFAULT_INPUT = "input.txt"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        description="Find the loop in a bootcode program and repair it"
    )
    parser.add_argument(
        "input",
        nargs="?",
        default=os.environ.get("BOOTCODE_INPUT", DEFAULT_INPUT),
        help=f"Program file, one instruction per line (default: {DEFAULT_INPUT})",
    )
    parser.add_argument(
        "--format",
        default=os.environ.get("BOOTCODE_FORMAT", "text"),
        choices=FORMATS,
        help="Report format (default: text)",
    )
    parser.add_argument(
        "--output",
        default=os.environ.get("BOOTCODE_OUTPUT"),
        help="Write the report to this file instead of stdout",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("BOOTCODE_LOG_LEVEL", DEFAULT_LOG_LEVEL),
        choices=LOG_LEVELS,
        help=f"Logging level (default: {DEFAULT_LOG_LEVEL})",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        default=os.environ.get("BOOTCODE_JSON_LOGS", "false").lower() == "true",
        help="Emit logs as JSON lines",
    )
    args = parser.parse_args(argv)

    # argparse does not check defaults against choices
    if args.format not in FORMATS:
        parser.error(
            f"invalid BOOTCODE_FORMAT: {args.format!r} (choose from {', '.join(FORMATS)})"
        )
    if args.log_level not in LOG_LEVELS:
        parser.error(
            f"invalid BOOTCODE_LOG_LEVEL: {args.log_level!r} (choose from {', '.join(LOG_LEVELS)})"
        )
    return args


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = parse_args(argv)
    configure_logging(args.log_level, json_logs=args.json_logs)
    logger = structlog.get_logger("bootcode")

    try:
        program = load_program(args.input)
        diagnosis = diagnose(program, Computer())
    except FileNotFoundError:
        logger.error("Program file not found", path=args.input)
        return 1
    except OSError as e:
        logger.error("Cannot read program file", path=args.input, error=str(e))
        return 1
    except BootcodeError as e:
        logger.error("Analysis failed", path=args.input, error=str(e))
        return 1

    try:
        report = export_report(diagnosis, args.format, args.output)
    except OSError as e:
        logger.error("Cannot write report", path=args.output, error=str(e))
        return 1
    if not args.output:
        sys.stdout.write(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
