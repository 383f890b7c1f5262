"""
Infrastructure layer package.

Contains all I/O integrations:
- Excel roster import/export (excel/)
- SQLite roster store (sqlite/)
- Configuration file loading (config/)
- Logging setup
"""

from rollcall.infrastructure.logging_config import setup_logging
from rollcall.infrastructure.sqlite import RosterStore

__all__ = [
    "RosterStore",
    "setup_logging",
]
