"""
SQLite persistence package.
"""

from rollcall.infrastructure.sqlite.store import DEFAULT_ROSTER_KEY, RosterStore

__all__ = ["DEFAULT_ROSTER_KEY", "RosterStore"]
