"""
Roster Writer (Exporter).

Writes the roster to a single-sheet workbook: the source header texts,
so the export can be re-imported, followed by a Present column.

Failures are raised as ExportError. Export is an explicit operator
action, so unlike store writes it is never swallowed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path

from openpyxl import Workbook
from openpyxl.utils.exceptions import IllegalCharacterError

from rollcall.domain.columns import PRESENT_COLUMN, SOURCE_COLUMNS
from rollcall.domain.errors import ExportError
from rollcall.domain.models import Roster
from rollcall.infrastructure.excel_styles import (
    ColumnDef,
    RosterStyles,
    style_data_cell,
    style_presence_cell,
    write_header,
)

logger = logging.getLogger(__name__)

DEFAULT_SHEET_TITLE = "Attendance"

# Column widths by record field; questions are long, answers are short
_WIDTHS = {
    "timestamp": 20,
    "name": 28,
    "mobile": 16,
    "email": 32,
    "upi": 22,
    "source": 30,
}

EXPORT_COLUMNS: list[ColumnDef] = [
    ColumnDef(name=header, width=_WIDTHS.get(field_name, 14))
    for header, field_name in SOURCE_COLUMNS.items()
] + [ColumnDef(name=PRESENT_COLUMN, width=10, alignment=RosterStyles.center)]


@dataclass(frozen=True)
class ExportResult:
    """
    Exported workbook plus the counts shown to the operator.

    Attributes:
        data: xlsx bytes
        total: Number of attendees written
        present_count: Number of attendees marked present
        path: Where the bytes were saved, if they were
    """

    data: bytes
    total: int
    present_count: int
    path: Path | None = None

    @property
    def absent_count(self) -> int:
        return self.total - self.present_count


def write_roster(roster: Roster, sheet_title: str = DEFAULT_SHEET_TITLE) -> ExportResult:
    """
    Serialize a roster to xlsx bytes.

    Args:
        roster: Roster snapshot to export
        sheet_title: Worksheet title

    Returns:
        ExportResult with the workbook bytes and summary counts

    Raises:
        ExportError: If the workbook cannot be built or serialized
    """
    try:
        wb = Workbook()
        ws = wb.active
        ws.title = sheet_title

        write_header(ws, EXPORT_COLUMNS)
        field_names = list(SOURCE_COLUMNS.values())

        for row_idx, record in enumerate(roster, start=2):
            striped = row_idx % 2 == 1
            for col_idx, field_name in enumerate(field_names, start=1):
                cell = ws.cell(row=row_idx, column=col_idx, value=getattr(record, field_name))
                # Text starting with "=" would otherwise be stored as a formula
                if isinstance(cell.value, str):
                    cell.data_type = "s"
                style_data_cell(cell, EXPORT_COLUMNS[col_idx - 1], striped)
            # bool value, read back by restore_attendance
            presence = ws.cell(row=row_idx, column=len(field_names) + 1, value=record.is_present)
            style_presence_cell(presence, record.is_present)

        buffer = BytesIO()
        wb.save(buffer)
    except (IllegalCharacterError, ValueError, TypeError, OSError) as e:
        logger.error("Failed to build export workbook: %s", e)
        raise ExportError(f"Failed to export roster: {e}") from e

    summary = roster.summary()
    logger.info(
        "Exported %d attendees (%d present)", summary.total, summary.present
    )
    return ExportResult(
        data=buffer.getvalue(),
        total=summary.total,
        present_count=summary.present,
    )


def save_roster(
    roster: Roster,
    path: Path | str,
    sheet_title: str = DEFAULT_SHEET_TITLE,
) -> ExportResult:
    """
    Export a roster and write it to disk.

    Raises:
        ExportError: If serialization or the file write fails
    """
    result = write_roster(roster, sheet_title=sheet_title)
    path = Path(path)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(result.data)
    except PermissionError as e:
        logger.error(
            "Cannot write to '%s' - file is open! Close Excel and retry.", path.name
        )
        raise ExportError(f"Cannot write {path}: file is in use") from e
    except OSError as e:
        logger.error("Failed to save export %s: %s", path, e)
        raise ExportError(f"Cannot write {path}: {e}") from e

    logger.info("Saved export to %s", path)
    return ExportResult(
        data=result.data,
        total=result.total,
        present_count=result.present_count,
        path=path,
    )
