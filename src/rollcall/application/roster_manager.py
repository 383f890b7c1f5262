"""
Roster State Manager - Single Source of Truth for the Roster.

Owns the canonical in-memory roster and coordinates every transition:
import, check-in resolution, confirmation, persistence and export.

Architecture Note:
    - The roster is an immutable value; each transition swaps in a new one
    - Readers get the current snapshot via `roster`, never a live reference
    - Memory is updated first, then persisted; a failed save never rolls
      memory back
    - Counts are computed from the roster on demand (no counters to drift)
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator, Protocol

from rollcall.domain.check_in import CheckInOutcome, CheckInResult, resolve
from rollcall.domain.errors import ExportError, RosterBusyError
from rollcall.domain.models import Roster, RosterSummary
from rollcall.infrastructure.excel import ExportResult, read_roster, save_roster, write_roster
from rollcall.infrastructure.excel.roster_writer import DEFAULT_SHEET_TITLE

logger = logging.getLogger(__name__)


# =============================================================================
# Protocols (Interfaces)
# =============================================================================


class RosterPersistence(Protocol):
    """Protocol for the durable roster store."""

    def save(self, roster: Roster) -> bool:
        """Persist the roster; False if the write failed."""
        ...

    def load(self) -> Roster:
        """Last saved roster, or an empty one."""
        ...

    def clear(self) -> bool:
        """Remove the saved roster."""
        ...


RosterReader = Callable[..., Roster]


# =============================================================================
# State Manager
# =============================================================================


class RosterStateManager:
    """
    Coordinates all roster transitions.

    Usage:
        manager = RosterStateManager(RosterStore("output/rollcall.db"))
        manager.load_persisted()

        result = manager.attempt_check_in(scanned_key)
        if result.outcome is CheckInOutcome.ELIGIBLE:
            manager.confirm_check_in(result.record.timestamp)

        manager.export_to("output/updated_attendance.xlsx")
    """

    def __init__(
        self,
        store: RosterPersistence,
        reader: RosterReader = read_roster,
        sheet_title: str = DEFAULT_SHEET_TITLE,
    ):
        """
        Initialize the manager with an empty roster.

        Args:
            store: Durable store for roster snapshots
            reader: Workbook importer (injectable for tests)
            sheet_title: Worksheet title used for exports
        """
        self._store = store
        self._reader = reader
        self._sheet_title = sheet_title
        self._roster = Roster.empty()
        self._busy = False
        self.last_save_ok = True

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def roster(self) -> Roster:
        """Current canonical roster snapshot."""
        return self._roster

    @property
    def busy(self) -> bool:
        """True while an operation is in flight."""
        return self._busy

    @contextmanager
    def _operation(self, name: str) -> Iterator[None]:
        if self._busy:
            raise RosterBusyError(f"Cannot {name}: another operation is in progress")
        self._busy = True
        try:
            yield
        finally:
            self._busy = False

    def _persist(self) -> None:
        self.last_save_ok = self._store.save(self._roster)
        if not self.last_save_ok:
            logger.warning("Roster change kept in memory but not saved")

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def load_persisted(self) -> RosterSummary:
        """Replace the roster with whatever the store holds (possibly empty)."""
        with self._operation("load saved roster"):
            self._roster = self._store.load()
            return self._roster.summary()

    def import_roster(self, data: bytes, *, restore_attendance: bool = False) -> RosterSummary:
        """
        Replace the roster with one read from workbook bytes.

        Destructive: check-in progress on the previous roster is discarded.
        If reading fails the previous roster stays in place.

        Raises:
            RosterImportError: If the input cannot be read as a roster
        """
        with self._operation("import roster"):
            roster = self._reader(data, restore_attendance=restore_attendance)

            if self._roster:
                logger.info(
                    "Replacing roster of %d attendees (%d present)",
                    self._roster.total,
                    self._roster.present_count,
                )
            self._roster = roster
            self._persist()

            logger.info("Imported %d attendees", roster.total)
            return roster.summary()

    def attempt_check_in(self, key: str) -> CheckInResult:
        """
        Classify a scanned or typed key. Never marks anyone present.

        Raises:
            ValueError: If the key is blank
        """
        with self._operation("check in"):
            result = resolve(self._roster, key)
            logger.debug("Key %r classified %s", result.key, result.outcome.value)
            return result

    def confirm_check_in(self, timestamp: str) -> CheckInResult:
        """
        Mark the attendee with this timestamp present.

        Idempotent: confirming an attendee who is already present changes
        nothing and returns ALREADY_PRESENT. Unknown timestamps return
        NOT_FOUND without touching the roster.

        Returns:
            Classification at confirmation time; on success the record is
            the updated (present) one

        Raises:
            ValueError: If the timestamp is blank
        """
        with self._operation("confirm check-in"):
            result = resolve(self._roster, timestamp)
            if result.outcome is not CheckInOutcome.ELIGIBLE:
                logger.info(
                    "Check-in for %r not applied (%s)", result.key, result.outcome.value
                )
                return result

            self._roster = self._roster.with_checked_in(result.key)
            self._persist()

            updated = self._roster.find(result.key)
            logger.info("Checked in %s (%s)", result.display_name, result.key)
            return CheckInResult(outcome=CheckInOutcome.ELIGIBLE, record=updated, key=result.key)

    def reset(self) -> None:
        """Discard the roster and its saved copy."""
        with self._operation("reset roster"):
            self._roster = Roster.empty()
            self.last_save_ok = self._store.clear()
            logger.info("Roster cleared")

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def _require_data(self) -> None:
        if not self._roster:
            raise ExportError("No attendance data to export.")

    def export_roster(self) -> ExportResult:
        """
        Serialize the roster to xlsx bytes.

        Raises:
            ExportError: If the roster is empty or cannot be serialized
        """
        with self._operation("export roster"):
            self._require_data()
            return write_roster(self._roster, sheet_title=self._sheet_title)

    def export_to(self, path: Path | str) -> ExportResult:
        """
        Export the roster to a file.

        Raises:
            ExportError: If the roster is empty or the write fails
        """
        with self._operation("export roster"):
            self._require_data()
            return save_roster(self._roster, path, sheet_title=self._sheet_title)

    # ------------------------------------------------------------------
    # Derived queries
    # ------------------------------------------------------------------

    @property
    def total(self) -> int:
        return self._roster.total

    @property
    def present_count(self) -> int:
        return self._roster.present_count

    @property
    def absent_count(self) -> int:
        return self._roster.absent_count

    def summary(self) -> RosterSummary:
        return self._roster.summary()
