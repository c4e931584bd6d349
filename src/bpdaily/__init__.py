"""bpdaily: collate blood pressure CSV exports into one line per day."""

__version__ = "0.1.0"
