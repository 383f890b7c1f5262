"""
Domain layer - pure attendance logic with no I/O.
"""

from rollcall.domain.check_in import CheckInOutcome, CheckInResult, resolve
from rollcall.domain.errors import (
    ExportError,
    PersistenceError,
    RollcallError,
    RosterBusyError,
    RosterImportError,
)
from rollcall.domain.models import AttendeeRecord, Roster, RosterSummary

__all__ = [
    "AttendeeRecord",
    "CheckInOutcome",
    "CheckInResult",
    "ExportError",
    "PersistenceError",
    "RollcallError",
    "Roster",
    "RosterBusyError",
    "RosterImportError",
    "RosterSummary",
    "resolve",
]
