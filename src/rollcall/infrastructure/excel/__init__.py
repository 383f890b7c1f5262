"""
Excel Roster Package.

Reads the registration workbook and writes the updated attendance workbook.

Usage:
    from rollcall.infrastructure.excel import read_roster, save_roster

    roster = read_roster(Path("responses.xlsx").read_bytes())
    result = save_roster(roster, "output/updated_attendance.xlsx")
"""

from rollcall.infrastructure.excel.roster_reader import read_roster
from rollcall.infrastructure.excel.roster_writer import (
    ExportResult,
    save_roster,
    write_roster,
)

__all__ = ["ExportResult", "read_roster", "save_roster", "write_roster"]
