"""
Tests for the Excel roster importer and exporter.
"""

from datetime import datetime
from io import BytesIO

import pytest
from openpyxl import Workbook, load_workbook

from conftest import SAMPLE_ATTENDEES, build_workbook, read_rows
from rollcall.domain.columns import PRESENT_COLUMN, SOURCE_COLUMNS, export_headers, header_for
from rollcall.domain.errors import ExportError, RosterImportError
from rollcall.domain.models import AttendeeRecord, Roster
from rollcall.infrastructure.excel import read_roster, save_roster, write_roster
from rollcall.infrastructure.excel.roster_reader import cell_text, parse_present


def _to_bytes(wb: Workbook) -> bytes:
    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


# =============================================================================
# Importer
# =============================================================================


def test_import_maps_every_column(sample_workbook):
    roster = read_roster(sample_workbook)

    assert roster.total == len(SAMPLE_ATTENDEES)
    first = roster.records[0]
    assert first == AttendeeRecord(**SAMPLE_ATTENDEES[0])


def test_import_preserves_order_and_starts_absent(sample_workbook):
    roster = read_roster(sample_workbook)

    assert [r.timestamp for r in roster] == [a["timestamp"] for a in SAMPLE_ATTENDEES]
    assert all(not r.is_present for r in roster)


def test_import_missing_column_yields_empty_string():
    headers = [header_for("timestamp"), header_for("name")]
    data = build_workbook(SAMPLE_ATTENDEES[:1], headers=headers)

    record = read_roster(data).records[0]
    assert record.name == "Lakshmi Reddy"
    assert record.email == ""
    assert record.upi == ""


def test_import_ignores_unrecognized_and_near_miss_headers():
    # Header text must match exactly, trailing space included
    headers = ["Timestamp", "Please mention your name", "Notes"]
    wb = Workbook()
    ws = wb.active
    ws.append(headers)
    ws.append(["T1", "Asha", "vip"])
    record = read_roster(_to_bytes(wb)).records[0]
    assert record.timestamp == "T1"
    assert record.name == ""


def test_import_ignores_present_column_by_default():
    data = build_workbook(
        SAMPLE_ATTENDEES[:2], extra_columns={PRESENT_COLUMN: [True, True]}
    )
    roster = read_roster(data)
    assert roster.present_count == 0


def test_import_restores_present_column_when_asked():
    data = build_workbook(
        SAMPLE_ATTENDEES, extra_columns={PRESENT_COLUMN: [True, "FALSE", "yes"]}
    )
    roster = read_roster(data, restore_attendance=True)
    assert [r.is_present for r in roster] == [True, False, True]


def test_import_skips_blank_rows():
    wb = Workbook()
    ws = wb.active
    ws.append(list(SOURCE_COLUMNS.keys()))
    ws.append(["T1", "Asha"])
    ws.append([None, None])
    ws.append(["T2", "Bala"])
    roster = read_roster(_to_bytes(wb))
    assert [r.timestamp for r in roster] == ["T1", "T2"]


def test_import_renders_non_text_cells():
    wb = Workbook()
    ws = wb.active
    ws.append(list(SOURCE_COLUMNS.keys()))
    ws.append([datetime(2025, 9, 20, 10, 5, 3), "Asha", 9876543210, None, 2, 0.0])
    record = read_roster(_to_bytes(wb)).records[0]
    assert record.timestamp == "9/20/2025 10:05:03"
    assert record.mobile == "9876543210"
    assert record.email == ""
    assert record.adults == "2"
    assert record.children == "0"


def test_import_only_reads_first_sheet():
    wb = Workbook()
    wb.active.append(list(SOURCE_COLUMNS.keys()))
    wb.active.append(["T1", "Asha"])
    other = wb.create_sheet("Other")
    other.append(list(SOURCE_COLUMNS.keys()))
    other.append(["X1", "Nobody"])
    roster = read_roster(_to_bytes(wb))
    assert [r.timestamp for r in roster] == ["T1"]


@pytest.mark.parametrize("data", [b"", b"not a workbook", b"PK\x03\x04garbage"])
def test_import_rejects_malformed_input(data):
    with pytest.raises(RosterImportError):
        read_roster(data)


def test_import_rejects_legacy_xls():
    # OLE2 header followed by padding, as an Excel 97-2003 file starts
    data = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1" + b"\x00" * 504
    with pytest.raises(RosterImportError, match=r"\.xls"):
        read_roster(data)


def test_import_rejects_header_only():
    with pytest.raises(RosterImportError):
        read_roster(build_workbook([]))


def test_import_rejects_empty_sheet():
    wb = Workbook()
    with pytest.raises(RosterImportError):
        read_roster(_to_bytes(wb))


def test_cell_text_and_parse_present():
    assert cell_text(None) == ""
    assert cell_text("  keep  ") == "  keep  "
    assert cell_text(3.5) == "3.5"
    assert cell_text(True) == "TRUE"
    assert parse_present(True) is True
    assert parse_present("✓") is True
    assert parse_present(1) is True
    assert parse_present(None) is False
    assert parse_present("no") is False


# =============================================================================
# Exporter
# =============================================================================


def test_export_layout(sample_workbook):
    roster = read_roster(sample_workbook).with_checked_in(SAMPLE_ATTENDEES[1]["timestamp"])

    result = write_roster(roster)
    rows = read_rows(result.data)

    assert list(rows[0]) == export_headers()
    assert len(rows) == 1 + roster.total
    assert rows[1][0] == SAMPLE_ATTENDEES[0]["timestamp"]
    assert [row[-1] for row in rows[1:]] == [False, True, False]
    assert result.total == 3
    assert result.present_count == 1
    assert result.absent_count == 2


def test_export_round_trip_preserves_attendance(sample_workbook):
    roster = read_roster(sample_workbook)
    roster = roster.with_checked_in(SAMPLE_ATTENDEES[0]["timestamp"])
    roster = roster.with_checked_in(SAMPLE_ATTENDEES[2]["timestamp"])

    reimported = read_roster(write_roster(roster).data, restore_attendance=True)

    assert {(r.timestamp, r.is_present) for r in reimported} == {
        (r.timestamp, r.is_present) for r in roster
    }
    assert reimported == roster


def test_export_keeps_leading_equals_as_text():
    roster = Roster([
        AttendeeRecord(timestamp="T1", name="=Asha", upi="=12345", is_present=True),
        AttendeeRecord(timestamp="=T2", name="Bala"),
    ])
    data = write_roster(roster).data

    ws = load_workbook(BytesIO(data)).active
    assert ws["B2"].data_type == "s"
    assert ws["A3"].value == "=T2"

    assert read_roster(data, restore_attendance=True) == roster


def test_export_sheet_title():
    roster = Roster([AttendeeRecord(timestamp="T1")])

    wb = load_workbook(BytesIO(write_roster(roster, sheet_title="Day 1").data))
    assert wb.sheetnames == ["Day 1"]


def test_export_invalid_sheet_title_raises():
    with pytest.raises(ExportError):
        write_roster(Roster([AttendeeRecord(timestamp="T1")]), sheet_title="a/b")


def test_save_roster_writes_file(tmp_path):
    roster = Roster([AttendeeRecord(timestamp="T1", is_present=True)])
    path = tmp_path / "out" / "updated_attendance.xlsx"

    result = save_roster(roster, path)

    assert path.exists()
    assert result.path == path
    assert path.read_bytes() == result.data


def test_save_roster_unwritable_path_raises(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    with pytest.raises(ExportError):
        save_roster(Roster([AttendeeRecord(timestamp="T1")]), blocker / "out.xlsx")
