"""
Excel styling for exported rosters.

Holds the palette and the few cell presets the attendance sheet needs,
plus helpers that lay out a header row, a data row and the presence cell.
Styling never changes cell values, so a styled export re-imports cleanly.
"""

from __future__ import annotations

from dataclasses import dataclass

from openpyxl.cell import Cell
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

FONT_NAME = "Segoe UI"


def _solid(color: str) -> PatternFill:
    return PatternFill(start_color=color, end_color=color, fill_type="solid")


def _box(color: str, bottom: str = "thin") -> Border:
    edge = Side(style="thin", color=color)
    return Border(left=edge, right=edge, top=edge, bottom=Side(style=bottom, color=color))


# ============================================================================
# Palette
# ============================================================================


class Colors:
    """Hex codes (no #)."""

    HEADER = "203764"  # Navy
    GRID = "B4B4B4"
    STRIPE = "F2F2F2"

    # Same pair Excel uses for "Good" / "Bad" conditional formats
    PRESENT = ("C6EFCE", "006100")
    ABSENT = ("FFC7CE", "9C0006")


# ============================================================================
# Cell presets
# ============================================================================


class RosterStyles:
    """Named style presets for the attendance sheet."""

    header_font = Font(name=FONT_NAME, size=11, bold=True, color="FFFFFF")
    header_fill = _solid(Colors.HEADER)
    header_border = _box(Colors.HEADER, bottom="medium")
    header_alignment = Alignment(horizontal="center", vertical="center", wrap_text=True)

    data_font = Font(name=FONT_NAME, size=10)
    data_border = _box(Colors.GRID)
    stripe_fill = _solid(Colors.STRIPE)

    present_font = Font(name=FONT_NAME, size=10, bold=True, color=Colors.PRESENT[1])
    present_fill = _solid(Colors.PRESENT[0])
    absent_font = Font(name=FONT_NAME, size=10, bold=True, color=Colors.ABSENT[1])
    absent_fill = _solid(Colors.ABSENT[0])

    left = Alignment(horizontal="left", vertical="center")
    center = Alignment(horizontal="center", vertical="center")


@dataclass(frozen=True)
class ColumnDef:
    """Header text, width in characters and alignment of one export column."""

    name: str
    width: int = 14
    alignment: Alignment = RosterStyles.left


# ============================================================================
# Layout helpers
# ============================================================================


def write_header(ws: Worksheet, columns: list[ColumnDef]) -> None:
    """Write and style row 1, set column widths, freeze it and add a filter."""
    for idx, column in enumerate(columns, start=1):
        cell = ws.cell(row=1, column=idx, value=column.name)
        cell.font = RosterStyles.header_font
        cell.fill = RosterStyles.header_fill
        cell.border = RosterStyles.header_border
        cell.alignment = RosterStyles.header_alignment
        ws.column_dimensions[get_column_letter(idx)].width = column.width

    ws.freeze_panes = "A2"
    ws.auto_filter.ref = f"A1:{get_column_letter(len(columns))}1"


def style_data_cell(cell: Cell, column: ColumnDef, striped: bool) -> None:
    cell.font = RosterStyles.data_font
    cell.border = RosterStyles.data_border
    cell.alignment = column.alignment
    if striped:
        cell.fill = RosterStyles.stripe_fill


def style_presence_cell(cell: Cell, is_present: bool) -> None:
    """Green for present, red for absent. The value itself is left alone."""
    if is_present:
        cell.font, cell.fill = RosterStyles.present_font, RosterStyles.present_fill
    else:
        cell.font, cell.fill = RosterStyles.absent_font, RosterStyles.absent_fill
    cell.border = RosterStyles.data_border
    cell.alignment = RosterStyles.center
