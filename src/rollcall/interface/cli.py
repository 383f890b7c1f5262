"""
Rollcall CLI - Operator console.

Each command resolves its dependencies from the Container created in the
main callback, so all commands share one settings/store/manager set.
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from rollcall.application.check_in_session import CheckInSession
from rollcall.application.container import Container
from rollcall.domain.check_in import CheckInOutcome
from rollcall.domain.errors import RollcallError
from rollcall.infrastructure.logging_config import setup_logging
from rollcall.interface.formatters import CheckInFormatter, RosterFormatter

logger = logging.getLogger(__name__)
console = Console()

app = typer.Typer(
    name="rollcall",
    help="📋 Event attendance tracker - import, check in, export.",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


def _fail(message: str) -> None:
    console.print(f"[red]❌ Error:[/red] {escape(message)}")
    raise typer.Exit(1)


def _container(ctx: typer.Context) -> Container:
    return ctx.obj


def _require_roster(container: Container) -> None:
    if container.manager.total == 0:
        _fail("No Data - please import an Excel file first.")


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Write logs to file"),
    config_dir: Optional[Path] = typer.Option(
        None, "--config-dir", help="Directory holding rollcall.json"
    ),
    db_path: Optional[Path] = typer.Option(
        None, "--db-path", help="SQLite file holding the saved roster"
    ),
):
    """
    📋 Rollcall - Event Attendance Tracker

    1. Import the registration sheet: `rollcall import responses.xlsx`
    2. Check attendees in: `rollcall check-in KEY` or `rollcall scan`
    3. Export the result: `rollcall export`
    """
    container = Container(config_dir=config_dir)
    try:
        container.override(db_path=db_path)
        settings = container.settings
    except ValueError as e:
        _fail(str(e))

    setup_logging(
        logging.DEBUG if verbose else logging.WARNING,
        log_file or settings.log_file,
    )
    ctx.obj = container
    ctx.call_on_close(container.close)


@app.command("import")
def import_command(
    ctx: typer.Context,
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Excel (.xlsx) roster"),
    resume: bool = typer.Option(
        False, "--resume", help="Keep the Present column of a previously exported roster"
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Discard existing check-ins without asking"),
):
    """
    Load a roster from Excel, replacing the current one.

    Any check-in progress on the current roster is discarded.
    """
    container = _container(ctx)
    manager = container.manager

    if manager.present_count and not yes:
        typer.confirm(
            f"The current roster has {manager.present_count} check-ins. Discard them?",
            abort=True,
        )

    try:
        summary = manager.import_roster(file.read_bytes(), restore_attendance=resume)
    except OSError as e:
        _fail(f"Failed to read {file}: {e}")
    except RollcallError as e:
        logger.error("Import failed: %s", e)
        _fail(f"Failed to load Excel file. Please try again. ({e})")

    RosterFormatter().display_import(summary)
    if not manager.last_save_ok:
        console.print("[yellow]⚠️  Roster could not be saved; it is kept in memory.[/yellow]")


def _run_check_in(session: CheckInSession, key: str, auto_confirm: bool) -> CheckInOutcome:
    """Submit one key and walk it through confirm/cancel."""
    formatter = CheckInFormatter()
    result = session.submit(key)
    formatter.display_result(result)

    if not result.outcome.can_confirm():
        session.cancel()
        return result.outcome

    if auto_confirm or typer.confirm(formatter.confirm_question(result), default=True):
        confirmed = session.confirm()
        formatter.display_confirmed(confirmed, saved=session.manager.last_save_ok)
    else:
        session.cancel()
        formatter.display_cancelled()
    return result.outcome


@app.command("check-in")
def check_in_command(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Timestamp ID (scanned or typed)"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Confirm without asking"),
):
    """
    Check one attendee in by their timestamp ID.
    """
    container = _container(ctx)
    _require_roster(container)

    try:
        outcome = _run_check_in(container.check_in_session(), key, auto_confirm=yes)
    except ValueError as e:
        _fail(str(e))
    except RollcallError as e:
        _fail(str(e))

    if outcome is CheckInOutcome.NOT_FOUND:
        raise typer.Exit(1)


@app.command("scan")
def scan_command(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", "-y", help="Confirm every eligible attendee"),
):
    """
    Check attendees in one after another.

    Reads one key per line (a QR scanner in keyboard mode works). A blank
    line or end of input stops the loop.
    """
    container = _container(ctx)
    _require_roster(container)
    session = container.check_in_session()
    checked_in = 0

    console.print("[blue]🔍 Ready. Scan or type a timestamp ID (blank line to stop).[/blue]")
    while True:
        try:
            key = typer.prompt("ID", default="", show_default=False)
        except typer.Abort:
            break
        if not key.strip():
            break

        before = container.manager.present_count
        try:
            _run_check_in(session, key, auto_confirm=yes)
        except typer.Abort:
            # input ended at the confirm prompt; drop the pending key
            if session.pending is not None:
                session.cancel()
            break
        except RollcallError as e:
            console.print(f"[red]❌ Error:[/red] {escape(str(e))}")
            continue
        checked_in += container.manager.present_count - before

    console.print(f"\n[blue]Checked in {checked_in} attendee(s) this session.[/blue]")
    RosterFormatter().display_summary(container.manager.summary())


@app.command("status")
def status_command(
    ctx: typer.Context,
    list_all: bool = typer.Option(False, "--list", help="List attendees"),
    absent: bool = typer.Option(False, "--absent", help="List only attendees not yet present"),
):
    """
    Show attendance totals.
    """
    manager = _container(ctx).manager
    formatter = RosterFormatter()
    formatter.display_summary(manager.summary())
    if (list_all or absent) and manager.total:
        formatter.display_attendees(manager.roster, only_absent=absent)


@app.command("export")
def export_command(
    ctx: typer.Context,
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Destination .xlsx (default from settings)"
    ),
):
    """
    Write the updated roster to Excel.
    """
    container = _container(ctx)
    path = output or container.settings.export_path

    try:
        result = container.manager.export_to(path)
    except RollcallError as e:
        logger.error("Export failed: %s", e)
        _fail(f"Failed to export Excel file. Please try again. ({e})")

    RosterFormatter().display_export(result)


@app.command("reset")
def reset_command(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
):
    """
    Discard the roster and all check-in progress.
    """
    manager = _container(ctx).manager
    if not yes:
        typer.confirm(
            f"Discard {manager.total} attendees and {manager.present_count} check-ins?",
            abort=True,
        )
    try:
        manager.reset()
    except RollcallError as e:
        _fail(str(e))
    console.print("[green]✅ Roster cleared.[/green]")


def main() -> int:
    """
    Main entry point for the Rollcall CLI.

    Returns:
        int: Exit code (0 for success, non-zero for failure)
    """
    try:
        app()
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 130
    return 0
