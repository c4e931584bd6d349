from dataclasses import dataclass
from typing import Optional, Tuple

BP_COLUMNS: Tuple[str, ...] = ("Date Time", "Systolic", "Diastolic", "Pulse", "Note")


@dataclass(frozen=True)
class CollateCfg:
    # Omron smartphone export, e.g. "Jan 02 2020 08:15:00"
    source_format: str = "%b %d %Y %H:%M:%S"
    # strptime is lenient about padding; day, minute and second need two digits
    source_pattern: Optional[str] = r"[A-Za-z]{3} \d{2} \d{4} \d{1,2}:\d{2}:\d{2}"
    output_format: str = "%Y-%m-%d %H:%M:%S"
    columns: Tuple[str, ...] = BP_COLUMNS
    encoding: str = "utf-8"

    @property
    def readings_width(self) -> int:
        return len(self.columns)


DEFAULT_CFG = CollateCfg()
