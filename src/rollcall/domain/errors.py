"""
Error taxonomy for Rollcall.

Resolver outcomes (not found, already present) are values, not errors.
Only failures of the import, export and persistence boundaries, and
re-entrant operations, are raised.
"""


class RollcallError(Exception):
    """Base class for all Rollcall errors."""


class RosterImportError(RollcallError):
    """The input could not be read as a roster (malformed or empty)."""


class ExportError(RollcallError):
    """The roster could not be serialized or written."""


class PersistenceError(RollcallError):
    """The durable store could not be read or written.

    Always recovered inside the store: reads fall back to an empty
    roster, writes are logged and skipped.
    """


class RosterBusyError(RollcallError):
    """An operation was started while another one is still running."""
