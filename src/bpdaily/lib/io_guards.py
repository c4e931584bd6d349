"""IO guards and atomic-write helpers.

Purpose
-------
Decide up front whether a conversion may write to its destination, and
write CSV output so that a failed run never leaves a truncated file
behind. Callers should use `check_output_target()` before doing any
work and `atomic_write_rows()` for the write itself.

Overwrite policy
----------------
- destination is a directory -> always refused, whatever `overwrite` says
- destination is an existing file -> refused unless `overwrite=True`
- destination cannot be stat'ed for any reason other than "missing" -> refused

Important
---------
`atomic_write_rows()` writes to a temporary file in the destination
directory, flushes and fsyncs it, gives it the usual umask-based mode
(NamedTemporaryFile creates it 0600), then moves it into place with
`os.replace`. Rows are written as given; ragged rows are not padded.
"""
from __future__ import annotations

from pathlib import Path
import csv
import logging
import os
import tempfile
from typing import Iterable, Optional, Sequence

from bpdaily.exceptions import OutputConflictError, OutputWriteError

logger = logging.getLogger("etl.io_guards")


def check_output_target(path: Path | str, overwrite: bool = False) -> None:
    """Raise OutputConflictError if we cannot (or may not) write to `path`."""
    p = Path(path)
    try:
        st = p.stat()
    except FileNotFoundError:
        return
    except OSError as e:
        raise OutputConflictError(f"output file already exists: cannot access output file ({p}): {e}") from e

    if p.is_dir():
        raise OutputConflictError(f"output file already exists: cannot overwrite a directory: {p}")
    if not overwrite:
        raise OutputConflictError(f"output file already exists: cannot overwrite existing file ({p})")
    logger.info("overwriting existing output %s (%d bytes)", p, st.st_size)


def _default_file_mode() -> int:
    """Mode a plain open() would give a new file under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def atomic_write_rows(
    rows: Iterable[Sequence[str]],
    path: Path | str,
    header: Optional[Sequence[str]] = None,
    *,
    encoding: str = "utf-8",
) -> int:
    """Atomically write `header` then `rows` as CSV to `path`.

    Returns the number of body rows written. On any failure the temp file
    is removed, the destination is left as it was and OutputWriteError is
    raised.
    """
    p = Path(path)
    parent = p.parent
    tmp: Optional[Path] = None
    written = 0
    stage = "header"
    try:
        with tempfile.NamedTemporaryFile(
            "w", delete=False, dir=str(parent), prefix=p.name + ".tmp.", newline="", encoding=encoding
        ) as tf:
            tmp = Path(tf.name)
            writer = csv.writer(tf, lineterminator="\n")
            if header is not None:
                writer.writerow(header)
            stage = "body"
            for row in rows:
                writer.writerow(row)
                written += 1
            tf.flush()
            os.fsync(tf.fileno())
        os.chmod(tmp, _default_file_mode())
        os.replace(tmp, p)
        tmp = None
    except OSError as e:
        if stage == "header":
            raise OutputWriteError(f"failed to write header to output file: {e}") from e
        raise OutputWriteError(f"failed to write blood pressure data to output file: {e}") from e
    finally:
        if tmp is not None:
            try:
                tmp.unlink()
            except FileNotFoundError:
                pass
    logger.debug("wrote %d rows -> %s", written, p)
    return written
