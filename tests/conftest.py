import sys
from pathlib import Path

import pytest

# Ensure src/ is on sys.path so tests run without an editable install
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def _quiet_timer(monkeypatch):
    # Timer lines are noise in test output unless a test asks for them
    monkeypatch.setenv("BPDAILY_TIMER", "0")
    yield


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR
