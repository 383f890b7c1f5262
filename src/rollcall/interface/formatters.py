"""
CLI result formatters for roster summaries and check-in outcomes.

Keeps display logic out of the command functions.
"""

import logging

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from rollcall.domain.check_in import CheckInOutcome, CheckInResult
from rollcall.domain.models import Roster, RosterSummary
from rollcall.infrastructure.excel import ExportResult

logger = logging.getLogger(__name__)
console = Console()


class RosterFormatter:
    """Formatter for roster totals and attendee listings."""

    def display_summary(self, summary: RosterSummary) -> None:
        """Show total / present / absent counts."""
        if summary.total == 0:
            console.print("[yellow]📋 No roster loaded.[/yellow] Import an Excel file to get started.")
            return

        table = Table(title="📊 Attendance", show_header=True, header_style="bold")
        table.add_column("Total Attendees", justify="right", style="cyan")
        table.add_column("Present", justify="right", style="green")
        table.add_column("Absent", justify="right", style="red")
        table.add_row(str(summary.total), str(summary.present), str(summary.absent))
        console.print(table)

    def display_attendees(self, roster: Roster, only_absent: bool = False) -> None:
        """List attendees with their presence."""
        table = Table(show_header=True, header_style="bold")
        table.add_column("Timestamp", style="cyan", no_wrap=True)
        table.add_column("Name")
        table.add_column("Mobile", style="dim")
        table.add_column("Adults", justify="right")
        table.add_column("Children", justify="right")
        table.add_column("Present", justify="center")

        shown = 0
        for record in roster:
            if only_absent and record.is_present:
                continue
            table.add_row(
                escape(record.timestamp),
                escape(record.name),
                escape(record.mobile),
                escape(record.adults),
                escape(record.children),
                "[green]✅[/green]" if record.is_present else "[red]—[/red]",
            )
            shown += 1

        console.print(table)
        console.print(f"[dim]{shown} of {roster.total} attendees shown[/dim]")

    def display_import(self, summary: RosterSummary) -> None:
        console.print(
            f"[green]✅ Excel file loaded successfully! Found {summary.total} attendees.[/green]"
        )
        if summary.present:
            console.print(f"[blue]Restored {summary.present} check-ins from the file.[/blue]")

    def display_export(self, result: ExportResult) -> None:
        name = escape(result.path.name) if result.path else "(in memory)"
        console.print(
            Panel(
                f"File saved as [bold]{name}[/bold]\n"
                f"Total: {result.total} | Present: {result.present_count}",
                title="✅ Export Successful",
                border_style="green",
            )
        )
        if result.path:
            console.print(f"[dim]{escape(str(result.path))}[/dim]")


class CheckInFormatter:
    """Formatter for the two-phase check-in prompts."""

    def display_result(self, result: CheckInResult) -> None:
        """Show the classification of a submitted key."""
        if result.outcome is CheckInOutcome.NOT_FOUND:
            console.print(
                f"[red]❌ Invalid:[/red] {escape(repr(result.key))} is not found in the attendee list."
            )
        elif result.outcome is CheckInOutcome.ALREADY_PRESENT:
            console.print(
                f"[yellow]⚠️  {escape(result.display_name)} is already marked as present.[/yellow]"
            )
        else:
            self.display_attendee(result)

    def display_attendee(self, result: CheckInResult) -> None:
        record = result.record
        if record is None:
            return
        lines = [
            f"[bold]{escape(result.display_name)}[/bold]",
            f"Timestamp: {escape(record.timestamp)}",
        ]
        if record.mobile:
            lines.append(f"Mobile: {escape(record.mobile)}")
        if record.adults or record.children:
            lines.append(f"Adults: {record.adults or '0'} | Children: {record.children or '0'}")
        console.print(Panel("\n".join(lines), title="👤 Attendee", border_style="blue"))

    def confirm_question(self, result: CheckInResult) -> str:
        return f"Mark presence for {result.display_name}?"

    def display_confirmed(self, result: CheckInResult, saved: bool = True) -> None:
        console.print(f"[green]✅ {escape(result.display_name)} marked as present.[/green]")
        if not saved:
            console.print("[yellow]⚠️  Progress could not be saved; it is kept in memory.[/yellow]")

    def display_cancelled(self) -> None:
        console.print("[dim]Cancelled.[/dim]")
