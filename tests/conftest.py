"""
Pytest fixtures shared by the test suite.

Stores run in memory unless a test needs the CSV/JSON files (tmp_path).
"""

import sys
from datetime import date
from pathlib import Path

import pytest

# Allow running the tests without installing the package
src_dir = Path(__file__).resolve().parents[1] / 'src'
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

from weightcal.controller import Controller  # noqa: E402
from weightcal.models import DayRecord  # noqa: E402
from weightcal.storage import EntryStore, PreferenceStore  # noqa: E402

# 2024-03-15 -> year 2024, month index 2 (March, 31 days)
TODAY = date(2024, 3, 15)


def make_records(year, month, values, field='morning_weight'):
    """Build DayRecords from a {day: value} mapping for one field."""
    return [DayRecord(year, month, day, **{field: value}) for day, value in values.items()]


@pytest.fixture
def entry_store():
    return EntryStore()


@pytest.fixture
def preference_store():
    return PreferenceStore()


@pytest.fixture
def controller(entry_store, preference_store):
    ctrl = Controller(entry_store, preference_store, today=TODAY)
    yield ctrl
    ctrl.close()
