"""
Shared test configuration.

Puts src/ on the path and provides roster workbook fixtures built with
openpyxl, an isolated SQLite store and a state manager wired to it.
"""

from __future__ import annotations

import sys
from io import BytesIO
from pathlib import Path
from typing import Callable

import pytest
from openpyxl import Workbook, load_workbook

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parents[1] / "src"))

from rollcall.application.roster_manager import RosterStateManager  # noqa: E402
from rollcall.domain.columns import SOURCE_COLUMNS  # noqa: E402
from rollcall.infrastructure.sqlite.store import RosterStore  # noqa: E402


SAMPLE_ATTENDEES = [
    {
        "timestamp": "9/20/2025 10:15:32",
        "name": "Lakshmi Reddy",
        "mobile": "9876543210",
        "email": "lakshmi@example.com",
        "adults": "2",
        "children": "1",
        "bathukamma": "Yes",
        "upi": "UPI123456",
        "first_time": "No",
        "source": "WhatsApp",
    },
    {
        "timestamp": "9/20/2025 11:02:07",
        "name": "Ravi Kumar",
        "mobile": "9123456780",
        "email": "ravi@example.com",
        "adults": "1",
        "children": "0",
        "bathukamma": "No",
        "upi": "",
        "first_time": "Yes",
        "source": "Friends",
    },
    {
        "timestamp": "9/21/2025 08:45:00",
        "name": "Sravani Rao",
        "mobile": "9988776655",
        "email": "sravani@example.com",
        "adults": "3",
        "children": "2",
        "bathukamma": "Yes",
        "upi": "UPI777",
        "first_time": "No",
        "source": "Instagram",
    },
]


def build_workbook(
    rows: list[dict],
    headers: list[str] | None = None,
    extra_columns: dict[str, list] | None = None,
) -> bytes:
    """
    Build registration workbook bytes.

    Args:
        rows: Dicts keyed by record field name
        headers: Header texts to write (default: all source headers)
        extra_columns: Additional header -> per-row values
    """
    headers = list(headers if headers is not None else SOURCE_COLUMNS.keys())
    extra_columns = extra_columns or {}
    header_row = headers + list(extra_columns.keys())

    wb = Workbook()
    ws = wb.active
    ws.title = "Form Responses 1"
    ws.append(header_row)
    for idx, row in enumerate(rows):
        values = [row.get(SOURCE_COLUMNS.get(h, ""), "") for h in headers]
        values += [col[idx] for col in extra_columns.values()]
        ws.append(values)

    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def read_rows(data: bytes) -> list[tuple]:
    """Read all rows of the first sheet of workbook bytes."""
    wb = load_workbook(BytesIO(data))
    try:
        return list(wb.worksheets[0].iter_rows(values_only=True))
    finally:
        wb.close()


@pytest.fixture
def make_workbook() -> Callable[..., bytes]:
    return build_workbook


@pytest.fixture
def sample_workbook() -> bytes:
    return build_workbook(SAMPLE_ATTENDEES)


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "rollcall.db"


@pytest.fixture
def store(db_path: Path):
    store = RosterStore(db_path)
    yield store
    store.close()


@pytest.fixture
def manager(store: RosterStore) -> RosterStateManager:
    return RosterStateManager(store)


@pytest.fixture
def loaded_manager(manager: RosterStateManager, sample_workbook: bytes) -> RosterStateManager:
    manager.import_roster(sample_workbook)
    return manager
