"""
End-to-end tests for the rollcall CLI using Typer's CliRunner.

Every invocation gets its own SQLite file and an empty config directory,
so commands only share state through the store, as in real use.
"""

import pytest
from typer.testing import CliRunner

from conftest import SAMPLE_ATTENDEES, build_workbook, read_rows
from rollcall.interface import cli as cli_module
from rollcall.interface import formatters
from rollcall.interface.cli import app

T1 = SAMPLE_ATTENDEES[0]["timestamp"]
T2 = SAMPLE_ATTENDEES[1]["timestamp"]

runner = CliRunner()


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    """Keep rich from wrapping table cells at the default 80 columns."""
    monkeypatch.setattr(cli_module.console, "width", 200)
    monkeypatch.setattr(formatters.console, "width", 200)


@pytest.fixture
def cli(tmp_path):
    """Invoke the CLI against an isolated store and config dir."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    db = tmp_path / "rollcall.db"

    def invoke(*args, input=None):
        return runner.invoke(
            app,
            ["--config-dir", str(config_dir), "--db-path", str(db), *args],
            input=input,
        )

    return invoke


@pytest.fixture
def roster_file(tmp_path):
    path = tmp_path / "responses.xlsx"
    path.write_bytes(build_workbook(SAMPLE_ATTENDEES))
    return path


def test_import(cli, roster_file):
    result = cli("import", str(roster_file))
    assert result.exit_code == 0, result.output
    assert "Found 3 attendees" in result.output


def test_import_missing_file(cli, tmp_path):
    result = cli("import", str(tmp_path / "nope.xlsx"))
    assert result.exit_code != 0


def test_import_malformed_file(cli, tmp_path):
    bad = tmp_path / "bad.xlsx"
    bad.write_bytes(b"not a workbook")
    result = cli("import", str(bad))
    assert result.exit_code == 1
    assert "Failed to load Excel file" in result.output


def test_check_in_without_roster(cli):
    result = cli("check-in", T1, "--yes")
    assert result.exit_code == 1
    assert "No Data" in result.output


def test_check_in_confirm_then_already_present(cli, roster_file):
    cli("import", str(roster_file))

    first = cli("check-in", T1, input="y\n")
    assert first.exit_code == 0, first.output
    assert "Mark presence for Lakshmi Reddy?" in first.output
    assert "marked as present" in first.output

    second = cli("check-in", T1, "--yes")
    assert second.exit_code == 0
    assert "already marked as present" in second.output


def test_check_in_declined(cli, roster_file):
    cli("import", str(roster_file))

    result = cli("check-in", T1, input="n\n")
    assert result.exit_code == 0
    assert "Cancelled" in result.output

    later = cli("check-in", T1, "--yes")
    assert "already" not in later.output
    assert "marked as present" in later.output


def test_check_in_not_found(cli, roster_file):
    cli("import", str(roster_file))
    result = cli("check-in", "1/1/1999 00:00:00", "--yes")
    assert result.exit_code == 1
    assert "not found in the attendee list" in result.output


def test_check_in_blank_key(cli, roster_file):
    cli("import", str(roster_file))
    result = cli("check-in", "   ", "--yes")
    assert result.exit_code == 1
    assert "Please enter a timestamp ID." in result.output


def test_scan_loop(cli, roster_file):
    cli("import", str(roster_file))
    result = cli("scan", "--yes", input=f"{T1}\nunknown\n{T2}\n\n")
    assert result.exit_code == 0, result.output
    assert "Checked in 2 attendee(s)" in result.output


def test_scan_input_ends_at_confirm_prompt(cli, roster_file):
    cli("import", str(roster_file))
    # second key is classified but input runs out before the y/n answer
    result = cli("scan", input=f"{T1}\ny\n{T2}\n")
    assert result.exit_code == 0, result.output
    assert "Checked in 1 attendee(s)" in result.output
    later = cli("check-in", T2, "--yes")
    assert "already" not in later.output


def test_status_empty(cli):
    result = cli("status")
    assert result.exit_code == 0
    assert "No roster loaded" in result.output


def test_status_lists_absent(cli, roster_file):
    cli("import", str(roster_file))
    cli("check-in", T1, "--yes")
    result = cli("status", "--absent")
    assert result.exit_code == 0
    assert "Ravi Kumar" in result.output
    assert "Lakshmi Reddy" not in result.output


def test_export(cli, roster_file, tmp_path):
    cli("import", str(roster_file))
    cli("check-in", T2, "--yes")
    out = tmp_path / "exports" / "updated_attendance.xlsx"

    result = cli("export", "--output", str(out))

    assert result.exit_code == 0, result.output
    assert "updated_attendance.xlsx" in result.output
    rows = read_rows(out.read_bytes())
    assert [row[-1] for row in rows[1:]] == [False, True, False]


def test_export_empty_roster(cli, tmp_path):
    result = cli("export", "--output", str(tmp_path / "out.xlsx"))
    assert result.exit_code == 1
    assert "No attendance data to export." in result.output


def test_reimport_requires_confirmation_when_progress_exists(cli, roster_file):
    cli("import", str(roster_file))
    cli("check-in", T1, "--yes")

    aborted = cli("import", str(roster_file), input="n\n")
    assert aborted.exit_code == 1

    replaced = cli("import", str(roster_file), "--yes")
    assert replaced.exit_code == 0
    assert "already" not in cli("check-in", T1, "--yes").output


def test_resume_from_export(cli, roster_file, tmp_path):
    cli("import", str(roster_file))
    cli("check-in", T1, "--yes")
    exported = tmp_path / "progress.xlsx"
    cli("export", "-o", str(exported))
    cli("reset", "--yes")

    result = cli("import", str(exported), "--resume")
    assert result.exit_code == 0
    assert "Restored 1 check-ins" in result.output


def test_reset(cli, roster_file):
    cli("import", str(roster_file))
    result = cli("reset", "--yes")
    assert result.exit_code == 0
    assert "No roster loaded" in cli("status").output


def test_invalid_config_file(tmp_path):
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    (config_dir / "rollcall.json").write_text("{broken")
    result = runner.invoke(app, ["--config-dir", str(config_dir), "status"])
    assert result.exit_code == 1
    assert "Invalid settings" in result.output
