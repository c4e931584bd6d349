"""Blood pressure domain: per-day collation of Omron CSV exports."""

from .collate import (
    Reading,
    DayRow,
    CollatedDays,
    normalize_timestamps,
    sort_readings,
    merge_same_day,
    discard_invalid,
    build_header,
    collate_days,
)
from .convert import (
    ConversionSummary,
    convert_bp_csv_to_daily,
    read_bp_csv,
    validate_header,
)

__all__ = [
    "Reading",
    "DayRow",
    "CollatedDays",
    "normalize_timestamps",
    "sort_readings",
    "merge_same_day",
    "discard_invalid",
    "build_header",
    "collate_days",
    "ConversionSummary",
    "convert_bp_csv_to_daily",
    "read_bp_csv",
    "validate_header",
]
