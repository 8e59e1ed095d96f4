# tests/conftest.py
import sys
from datetime import datetime
from pathlib import Path

# ---------------------------------------------------------
# Ensure project root is on PYTHONPATH BEFORE app imports
# ---------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# ---------------------------------------------------------
# Now safe to import app + dependencies
# ---------------------------------------------------------
import pytest

import config


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """
    Every test starts from the defaults, whatever the local .env holds.
    """
    for name in (
        "NLDATES_DATE_FORMAT",
        "NLDATES_TIME_FORMAT",
        "NLDATES_SEPARATOR",
        "NLDATES_WEEK_START",
    ):
        monkeypatch.delenv(name, raising=False)

    config.reset_settings()
    yield
    config.reset_settings()


@pytest.fixture
def reference():
    # Wednesday
    return datetime(2021, 6, 16, 14, 30, 45)


@pytest.fixture
def frozen_now(monkeypatch, reference):
    """Pin the wall clock read by the orchestration layer."""
    from services import nld_parser

    monkeypatch.setattr(nld_parser, "get_now", lambda: reference)
    return reference
