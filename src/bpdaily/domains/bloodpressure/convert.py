"""Convert an Omron blood pressure CSV export into a one-row-per-day CSV.

The flow is strictly sequential: refuse early if the destination cannot
be written, read and validate the input, collate it, then write the
widened header and the day rows in one atomic step.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple
import csv
import logging

from bpdaily.domains.bloodpressure.collate import collate_days
from bpdaily.domains.config import CollateCfg, DEFAULT_CFG
from bpdaily.exceptions import BodyReadError, HeaderValidationError, InputOpenError
from bpdaily.lib.io_guards import atomic_write_rows, check_output_target

logger = logging.getLogger("etl.bloodpressure")


@dataclass(frozen=True)
class ConversionSummary:
    input_path: str
    output_path: str
    readings_read: int
    readings_discarded: int
    days_written: int
    max_readings_in_one_day: int
    header_width: int
    dry_run: bool = False


def validate_header(record: Optional[Sequence[str]], cfg: Optional[CollateCfg] = None) -> None:
    cfg = cfg or DEFAULT_CFG
    if record is None:
        raise HeaderValidationError("failed to read blood pressure CSV header record: input is empty")
    if tuple(record) != tuple(cfg.columns):
        raise HeaderValidationError(
            "header record of input file does not match blood pressure CSV format: "
            f"expected {list(cfg.columns)}, got {list(record)}"
        )


def read_bp_csv(path: Path | str, cfg: Optional[CollateCfg] = None) -> Tuple[List[str], List[List[str]]]:
    """Read and validate the header, then load every body record.

    Leading blank lines before the header are skipped. Blank lines in the
    body come back as empty records; any other record must have exactly
    one field per column.
    """
    cfg = cfg or DEFAULT_CFG
    try:
        fh = open(path, newline="", encoding=cfg.encoding)
    except OSError as e:
        raise InputOpenError(f"could not open input file: {e}") from e

    with fh:
        reader = csv.reader(fh, strict=True)
        try:
            header = next((rec for rec in reader if rec), None)
        except (csv.Error, UnicodeDecodeError) as e:
            raise HeaderValidationError(f"failed to read blood pressure CSV header record: {e}") from e
        validate_header(header, cfg)

        body: List[List[str]] = []
        try:
            for rec in reader:
                if rec and len(rec) != cfg.readings_width:
                    raise BodyReadError(
                        f"failed to read body of input file: record on line {reader.line_num}: "
                        f"wrong number of fields ({len(rec)}, expected {cfg.readings_width})"
                    )
                body.append(rec)
        except (csv.Error, UnicodeDecodeError) as e:
            raise BodyReadError(f"failed to read body of input file: line {reader.line_num}: {e}") from e

    return header, body


def convert_bp_csv_to_daily(
    input_path: Path | str,
    output_path: Path | str,
    overwrite: bool = False,
    *,
    dry_run: bool = False,
    cfg: Optional[CollateCfg] = None,
) -> ConversionSummary:
    """Read the blood pressure CSV at `input_path`, gather readings for the
    same day onto one line and write the result to `output_path`.

    An existing output file is only replaced when `overwrite` is True; a
    directory is never replaced. With `dry_run` nothing is written.
    Raises a BPConversionError subclass on failure.
    """
    cfg = cfg or DEFAULT_CFG

    # no point processing the input if we could never write the output
    check_output_target(output_path, overwrite)

    _, body = read_bp_csv(input_path, cfg)
    logger.info("bloodpressure: read %d records from %s", len(body), input_path)

    collated = collate_days(body, cfg)
    if collated.discarded:
        logger.warning(
            "bloodpressure: discarded %d record(s) with a missing or unparseable timestamp",
            collated.discarded,
        )

    if dry_run:
        logger.info(
            "[dry-run] bloodpressure: would write %d day rows (%d header columns) -> %s",
            len(collated.rows), len(collated.header), output_path,
        )
    else:
        atomic_write_rows(
            (day.fields for day in collated.rows),
            output_path,
            header=collated.header,
            encoding=cfg.encoding,
        )
        logger.info(
            "bloodpressure: wrote %d day rows, max %d readings in one day -> %s",
            len(collated.rows), collated.max_readings_in_one_day, output_path,
        )

    return ConversionSummary(
        input_path=str(input_path),
        output_path=str(output_path),
        readings_read=collated.readings_total,
        readings_discarded=collated.discarded,
        days_written=len(collated.rows),
        max_readings_in_one_day=collated.max_readings_in_one_day,
        header_width=len(collated.header),
        dry_run=dry_run,
    )
