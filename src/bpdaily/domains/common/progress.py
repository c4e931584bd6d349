# bpdaily/domains/common/progress.py
from __future__ import annotations
import os
import sys
import time
from typing import IO, Optional


def _should_show_timer() -> bool:
    """BPDAILY_TIMER=0 silences the header/footer lines."""
    return os.getenv("BPDAILY_TIMER", "1") != "0"


class Timer:
    def __init__(self, label: str = "task", stream: Optional[IO[str]] = None):
        self.label = label
        self.stream = stream
        self.start = 0.0
        self.elapsed = 0.0

    def _print(self, msg: str) -> None:
        if _should_show_timer():
            print(msg, file=self.stream or sys.stdout)

    def __enter__(self):
        self.start = time.perf_counter()
        # ASCII-only prefix
        self._print(f">>> {self.label} ...")
        return self

    def __exit__(self, exc_type, exc, tb):
        self.elapsed = time.perf_counter() - self.start
        status = "OK" if exc is None else "ERROR"
        # ASCII-only summary
        self._print(f"[OK] {self.label}: {self.elapsed:.2f}s [{status}]")
