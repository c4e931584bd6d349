#!/usr/bin/env python3
"""Command line runner for the blood pressure daily converter.

Usage: bp-daily INPUT OUTPUT [--dry-run]

Reads an Omron blood pressure CSV export at INPUT and writes one row per
day to OUTPUT. An existing OUTPUT is never overwritten from the command
line. Exit status is 0 on success, 2 on a usage error and a distinct
non-zero code for each conversion failure (see bpdaily.exceptions).
"""
from __future__ import annotations
import sys
import argparse
import os
import logging

from bpdaily.domains.bloodpressure.convert import convert_bp_csv_to_daily
from bpdaily.domains.common.progress import Timer
from bpdaily.exceptions import BPConversionError

logger = logging.getLogger("etl.bloodpressure")


def _configure_logging() -> None:
    # honor BPDAILY_LOG_LEVEL once; default to INFO when unset or unknown
    lvl_name = os.getenv("BPDAILY_LOG_LEVEL", "INFO")
    lvl = getattr(logging, lvl_name.upper(), logging.INFO)
    if not isinstance(lvl, int):
        lvl = logging.INFO
    logging.basicConfig(level=lvl, format="%(levelname)s: %(message)s")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bp-daily",
        description="Collate a blood pressure CSV export into one line per day, sorted by date.",
    )
    parser.add_argument("input", help="Blood pressure CSV export to read")
    parser.add_argument("output", help="Path of the daily CSV to create (must not exist)")
    parser.add_argument("--dry-run", action="store_true", dest="dry_run", help="Collate and report, but write nothing")
    return parser


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    _configure_logging()
    args = build_parser().parse_args(argv)

    try:
        with Timer(f"bp-daily [{args.input} -> {args.output}]"):
            summary = convert_bp_csv_to_daily(args.input, args.output, overwrite=False, dry_run=args.dry_run)
    except BPConversionError as e:
        logger.error("%s: %s", e.stage, e)
        return e.exit_code

    logger.info(
        "bp-daily: %d readings -> %d days (%d discarded)",
        summary.readings_read, summary.days_written, summary.readings_discarded,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
