"""
Collate timestamped blood pressure readings into one row per day.

Purpose:
    Take the body rows of an Omron blood pressure export (one reading per
    row) and fold every reading taken on the same calendar day onto a
    single row, in ascending date and time order, ready for plotting in a
    spreadsheet.

Pipeline (each stage takes a tuple and returns a new one):
    normalize_timestamps -> sort_readings -> merge_same_day
    -> build_header -> discard_invalid

A reading whose timestamp cannot be parsed is kept as an invalid
Reading (timestamp=None) until the discard stage; there is no sentinel
value in the data itself.
"""
from __future__ import annotations

from dataclasses import dataclass
from itertools import chain
from typing import Iterable, Optional, Sequence, Tuple
import logging

import pandas as pd

from bpdaily.domains.config import CollateCfg, DEFAULT_CFG

logger = logging.getLogger("etl.bloodpressure")

DAY_PREFIX_LEN = len("YYYY-MM-DD")


@dataclass(frozen=True)
class Reading:
    """One row of the export. `timestamp` is None when the row is invalid."""

    timestamp: Optional[str]
    fields: Tuple[str, ...]

    @property
    def valid(self) -> bool:
        return self.timestamp is not None

    @property
    def day(self) -> Optional[str]:
        if self.timestamp is None:
            return None
        return self.timestamp[:DAY_PREFIX_LEN]


@dataclass(frozen=True)
class DayRow:
    """All readings of one calendar day, in time order."""

    day: str
    readings: Tuple[Reading, ...]

    @property
    def count(self) -> int:
        return len(self.readings)

    @property
    def fields(self) -> Tuple[str, ...]:
        return tuple(chain.from_iterable(r.fields for r in self.readings))


@dataclass(frozen=True)
class CollatedDays:
    header: Tuple[str, ...]
    rows: Tuple[DayRow, ...]
    max_readings_in_one_day: int
    readings_total: int
    discarded: int


def normalize_timestamps(rows: Iterable[Sequence[str]], cfg: Optional[CollateCfg] = None) -> Tuple[Reading, ...]:
    """Parse field 0 of every row into the sortable canonical form.

    Rows with no fields, or whose first field does not match
    `cfg.source_pattern` and `cfg.source_format`, come back as invalid
    readings. No row is added or removed and fields after field 0 are
    never touched.
    """
    cfg = cfg or DEFAULT_CFG
    records = [tuple(r) for r in rows]
    raw = pd.Series([r[0] if r else None for r in records], dtype="object")
    if cfg.source_pattern:
        raw = raw.where(raw.str.fullmatch(cfg.source_pattern, na=False))
    parsed = pd.to_datetime(raw, format=cfg.source_format, errors="coerce")

    out = []
    for record, ts in zip(records, parsed):
        if not record or pd.isna(ts):
            out.append(Reading(None, record))
            continue
        canonical = ts.strftime(cfg.output_format)
        out.append(Reading(canonical, (canonical,) + record[1:]))
    return tuple(out)


def sort_readings(readings: Iterable[Reading]) -> Tuple[Reading, ...]:
    """Ascending by full timestamp; invalid readings last, in input order."""
    return tuple(sorted(readings, key=lambda r: (not r.valid, r.timestamp or "")))


def merge_same_day(readings: Sequence[Reading]) -> Tuple[Tuple[DayRow, ...], int]:
    """Fold consecutive readings sharing a day prefix into DayRows.

    Expects the output of sort_readings. The walk stops at the first
    invalid reading since everything after it is invalid too.

    Returns the day rows and the largest number of readings folded into
    any one day (at least 1, even when there are no valid readings).
    """
    days = []
    current: list = []
    for reading in readings:
        if not reading.valid:
            break
        if current and reading.day != current[0].day:
            days.append(DayRow(current[0].day, tuple(current)))
            current = []
        current.append(reading)
    if current:
        days.append(DayRow(current[0].day, tuple(current)))

    max_readings = max((d.count for d in days), default=1)
    return tuple(days), max_readings


def discard_invalid(readings: Iterable[Reading]) -> Tuple[Reading, ...]:
    return tuple(r for r in readings if r.valid)


def build_header(max_readings_in_one_day: int, cfg: Optional[CollateCfg] = None) -> Tuple[str, ...]:
    """Repeat the column names once per reading, numbered from 1.

    >>> build_header(2)[:6]
    ('Date Time 1', 'Systolic 1', 'Diastolic 1', 'Pulse 1', 'Note 1', 'Date Time 2')
    """
    if max_readings_in_one_day < 1:
        raise ValueError(f"max_readings_in_one_day must be >= 1, got {max_readings_in_one_day}")
    cfg = cfg or DEFAULT_CFG
    return tuple(
        f"{name} {set_number}"
        for set_number in range(1, max_readings_in_one_day + 1)
        for name in cfg.columns
    )


def collate_days(rows: Iterable[Sequence[str]], cfg: Optional[CollateCfg] = None) -> CollatedDays:
    """Run the whole pipeline over the body rows of one export."""
    cfg = cfg or DEFAULT_CFG
    readings = normalize_timestamps(rows, cfg)
    ordered = sort_readings(readings)
    days, max_readings = merge_same_day(ordered)
    header = build_header(max_readings, cfg)
    kept = discard_invalid(ordered)
    discarded = len(ordered) - len(kept)

    logger.debug(
        "collate: %d readings, %d invalid, %d days, max %d per day",
        len(ordered), discarded, len(days), max_readings,
    )
    return CollatedDays(
        header=header,
        rows=days,
        max_readings_in_one_day=max_readings,
        readings_total=len(ordered),
        discarded=discarded,
    )
