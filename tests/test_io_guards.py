import os
import stat

import pytest

from bpdaily.exceptions import OutputConflictError, OutputWriteError
from bpdaily.lib import io_guards
from bpdaily.lib.io_guards import atomic_write_rows, check_output_target


def test_check_output_target_missing_path_is_fine(tmp_path):
    check_output_target(tmp_path / "new.csv")


def test_check_output_target_existing_file(tmp_path):
    p = tmp_path / "exists.csv"
    p.write_text("a\n")
    with pytest.raises(OutputConflictError, match="cannot overwrite existing file"):
        check_output_target(p, overwrite=False)
    check_output_target(p, overwrite=True)


def test_check_output_target_directory(tmp_path):
    with pytest.raises(OutputConflictError, match="cannot overwrite a directory"):
        check_output_target(tmp_path, overwrite=True)


def test_atomic_write_rows_keeps_ragged_rows(tmp_path):
    p = tmp_path / "out.csv"
    n = atomic_write_rows([["a", "b"], ["c", "d", "e", "f"], ["g,h", ""]], p, header=["h1", "h2"])
    assert n == 3
    assert p.read_text() == 'h1,h2\na,b\nc,d,e,f\n"g,h",\n'
    # no temp files left next to the output
    assert sorted(x.name for x in tmp_path.iterdir()) == ["out.csv"]


def test_atomic_write_rows_failure_leaves_target_untouched(tmp_path, monkeypatch):
    p = tmp_path / "out.csv"
    p.write_text("original\n")

    def boom(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(io_guards.os, "replace", boom)
    with pytest.raises(OutputWriteError, match="failed to write blood pressure data"):
        atomic_write_rows([["x"]], p, header=["h"])
    assert p.read_text() == "original\n"
    assert sorted(x.name for x in tmp_path.iterdir()) == ["out.csv"]


def test_atomic_write_rows_missing_directory(tmp_path):
    with pytest.raises(OutputWriteError, match="failed to write header"):
        atomic_write_rows([], tmp_path / "nope" / "out.csv", header=["h"])
    assert not (tmp_path / "nope").exists()


def test_atomic_write_rows_uses_umask_mode(tmp_path):
    old = os.umask(0o022)
    try:
        p = tmp_path / "out.csv"
        atomic_write_rows([["a"]], p, header=["h"])
        assert stat.S_IMODE(p.stat().st_mode) == 0o644
    finally:
        os.umask(old)
