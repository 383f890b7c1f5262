"""
SQLite-based key-value store for roster persistence.

Holds one serialized roster snapshot under a fixed key. Every write
replaces the previous value; there is no history.

Durability is best effort: a failed write is logged and reported through
the return value, never raised, and a failed or corrupt read yields an
empty roster. Uses stdlib sqlite3 with no ORM.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path

from rollcall.domain.errors import PersistenceError
from rollcall.domain.models import Roster

logger = logging.getLogger(__name__)

DEFAULT_ROSTER_KEY = "attendees"


class RosterStore:
    """
    SQLite-backed storage for the current roster snapshot.

    Usage:
        store = RosterStore(Path("output/rollcall.db"))
        store.save(roster)
        roster = store.load()
        store.close()
    """

    def __init__(self, db_path: Path | str, roster_key: str = DEFAULT_ROSTER_KEY) -> None:
        """
        Initialize roster store.

        Args:
            db_path: Path to SQLite database file (created if not exists)
            roster_key: Key the roster is stored under
        """
        self.db_path = Path(db_path)
        self.roster_key = roster_key
        self._connection: sqlite3.Connection | None = None
        logger.debug("RosterStore initialized: %s (key=%s)", self.db_path, roster_key)

    def _get_connection(self) -> sqlite3.Connection:
        """Get or create database connection (schema created on first use)."""
        if self._connection is None:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(self.db_path)
            conn.row_factory = sqlite3.Row
            try:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS kv_store (
                        key TEXT PRIMARY KEY,
                        value TEXT NOT NULL,
                        updated_at TEXT NOT NULL
                    )
                """
                )
                conn.commit()
            except sqlite3.Error:
                conn.close()
                raise
            self._connection = conn
            logger.debug("Database connection established")
        return self._connection

    def close(self) -> None:
        """Close database connection."""
        if self._connection:
            self._connection.close()
            self._connection = None
            logger.debug("Database connection closed")

    def __enter__(self) -> RosterStore:
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # ========================================================================
    # Raw key-value access
    # ========================================================================

    def _write(self, key: str, value: str) -> None:
        try:
            conn = self._get_connection()
            conn.execute(
                """
                INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
            """,
                (key, value, datetime.now(timezone.utc).isoformat()),
            )
            conn.commit()
        except (sqlite3.Error, OSError) as e:
            raise PersistenceError(f"Failed to write '{key}': {e}") from e

    def _read(self, key: str) -> str | None:
        try:
            row = (
                self._get_connection()
                .execute("SELECT value FROM kv_store WHERE key = ?", (key,))
                .fetchone()
            )
        except (sqlite3.Error, OSError) as e:
            raise PersistenceError(f"Failed to read '{key}': {e}") from e
        return row["value"] if row else None

    def _delete(self, key: str) -> None:
        try:
            conn = self._get_connection()
            conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            conn.commit()
        except (sqlite3.Error, OSError) as e:
            raise PersistenceError(f"Failed to delete '{key}': {e}") from e

    # ========================================================================
    # Roster snapshot
    # ========================================================================

    def save(self, roster: Roster) -> bool:
        """
        Overwrite the stored roster.

        Returns:
            True if the write succeeded, False if it failed (logged)
        """
        try:
            payload = json.dumps(roster.to_list(), ensure_ascii=False)
            self._write(self.roster_key, payload)
        except PersistenceError as e:
            logger.error("Error saving roster (continuing without save): %s", e)
            return False
        logger.debug("Saved roster: %d attendees, %d present", roster.total, roster.present_count)
        return True

    def load(self) -> Roster:
        """
        Load the stored roster.

        Returns:
            Last saved roster, or an empty roster if none is stored or the
            stored value cannot be read
        """
        try:
            payload = self._read(self.roster_key)
        except PersistenceError as e:
            logger.warning("Error loading saved roster, starting empty: %s", e)
            return Roster.empty()

        if payload is None:
            logger.debug("No saved roster under key '%s'", self.roster_key)
            return Roster.empty()

        try:
            roster = Roster.from_list(json.loads(payload))
        except (json.JSONDecodeError, ValueError, TypeError) as e:
            logger.warning("Saved roster is corrupt, starting empty: %s", e)
            return Roster.empty()

        logger.info("Loaded saved roster: %d attendees", len(roster))
        return roster

    def clear(self) -> bool:
        """Delete the stored roster. Returns False if the delete failed."""
        try:
            self._delete(self.roster_key)
        except PersistenceError as e:
            logger.error("Error clearing saved roster: %s", e)
            return False
        return True
