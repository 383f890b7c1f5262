"""
Rollcall - Event Attendance Tracker.

Imports a registration roster from Excel, checks attendees in by their
submission timestamp (scanned from a QR code or typed), keeps progress in
SQLite across sessions, and exports the updated roster.

Usage:
    # CLI
    rollcall import responses.xlsx
    rollcall check-in "9/20/2025 10:15:32"
    rollcall export

    # Programmatic
    from rollcall.application import RosterStateManager
    from rollcall.infrastructure import RosterStore

    manager = RosterStateManager(RosterStore("output/rollcall.db"))
    manager.load_persisted()
"""

__version__ = "0.1.0"
__author__ = "Rollcall Team"

from rollcall.application.roster_manager import RosterStateManager

__all__ = ["RosterStateManager", "__version__"]
