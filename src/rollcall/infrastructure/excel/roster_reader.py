"""
Roster Reader (Importer).

Reads the registration workbook into a Roster.
Only the first sheet is read; the header row is matched against the fixed
source header texts and unrecognized columns are ignored.
"""

from __future__ import annotations

import logging
import zipfile
from datetime import date, datetime, time
from io import BytesIO
from typing import Any, Iterable

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from rollcall.domain.columns import (
    PRESENT_COLUMN,
    PRESENT_TRUE_VALUES,
    SOURCE_COLUMNS,
)
from rollcall.domain.errors import RosterImportError
from rollcall.domain.models import AttendeeRecord, Roster

logger = logging.getLogger(__name__)

# OLE2 compound file header (Excel 97-2003 .xls); openpyxl cannot read these
XLS_SIGNATURE = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"

# Everything openpyxl raises for input that is not an xlsx container
_UNREADABLE = (
    InvalidFileException,
    zipfile.BadZipFile,
    KeyError,
    ValueError,
    TypeError,
    OSError,
)


def read_roster(data: bytes, *, restore_attendance: bool = False) -> Roster:
    """
    Parse workbook bytes into a roster.

    Args:
        data: Raw bytes of an .xlsx workbook
        restore_attendance: Also read the Present column written by the
            exporter (resuming an exported roster). Otherwise every
            record starts absent.

    Returns:
        Roster in source row order

    Raises:
        RosterImportError: If the bytes are not a workbook or hold no rows
    """
    if not data:
        raise RosterImportError("Input is empty")
    if data.startswith(XLS_SIGNATURE):
        raise RosterImportError(
            "Legacy .xls workbooks are not supported; save the sheet as .xlsx and import again"
        )

    try:
        wb = load_workbook(BytesIO(data), read_only=True, data_only=True)
    except _UNREADABLE as e:
        logger.error("Failed to open workbook: %s", e)
        raise RosterImportError(f"Not a readable Excel workbook: {e}") from e

    try:
        if not wb.worksheets:
            raise RosterImportError("Workbook has no sheets")
        ws = wb.worksheets[0]
        rows = ws.iter_rows(values_only=True)
        records = list(_read_records(rows, restore_attendance))
    except _UNREADABLE as e:
        logger.error("Failed to read worksheet: %s", e)
        raise RosterImportError(f"Could not read worksheet: {e}") from e
    finally:
        wb.close()

    if not records:
        raise RosterImportError("No attendee rows found after the header")

    roster = Roster(records)
    duplicates = roster.duplicate_keys()
    if duplicates:
        logger.warning(
            "%d duplicate timestamp(s) in roster; only the first row of each is reachable: %s",
            len(duplicates),
            ", ".join(duplicates[:5]),
        )
    logger.info("Read %d attendees from sheet '%s'", len(roster), ws.title)
    return roster


def _read_records(
    rows: Iterable[tuple[Any, ...]],
    restore_attendance: bool,
) -> Iterable[AttendeeRecord]:
    rows = iter(rows)
    header_row = next(rows, None)
    if not header_row:
        return

    field_indices = _map_header(header_row)
    present_idx = _find_header(header_row, PRESENT_COLUMN) if restore_attendance else None

    if not field_indices:
        logger.warning("No recognized columns in header row")

    for row in rows:
        if not row or all(_is_blank(v) for v in row):
            continue

        values = {
            field_name: cell_text(row[idx] if idx < len(row) else None)
            for field_name, idx in field_indices.items()
        }
        is_present = False
        if present_idx is not None and present_idx < len(row):
            is_present = parse_present(row[present_idx])

        yield AttendeeRecord(**values, is_present=is_present)


def _map_header(header_row: tuple[Any, ...]) -> dict[str, int]:
    """Map record field -> column index by exact header text."""
    indices: dict[str, int] = {}
    for idx, header in enumerate(header_row):
        if header is None:
            continue
        field_name = SOURCE_COLUMNS.get(str(header))
        if field_name and field_name not in indices:
            indices[field_name] = idx
    return indices


def _find_header(header_row: tuple[Any, ...], name: str) -> int | None:
    for idx, header in enumerate(header_row):
        if header is not None and str(header) == name:
            return idx
    return None


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def cell_text(value: Any) -> str:
    """
    Render a cell value as the text an operator would see.

    Dates use the Google Forms timestamp layout (M/D/YYYY H:MM:SS) so a
    scanned timestamp matches the imported key.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        return (
            f"{value.month}/{value.day}/{value.year} "
            f"{value.hour}:{value.minute:02d}:{value.second:02d}"
        )
    if isinstance(value, date):
        return f"{value.month}/{value.day}/{value.year}"
    if isinstance(value, time):
        return f"{value.hour}:{value.minute:02d}:{value.second:02d}"
    return str(value)


def parse_present(value: Any) -> bool:
    """Interpret a boolean-like Present cell."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, float)):
        return value == 1
    return str(value).strip().lower() in PRESENT_TRUE_VALUES
