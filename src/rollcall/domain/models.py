"""
Domain models for Rollcall.

This module contains the core entities of an event run:
- Attendee records imported from the registration spreadsheet
- The roster holding them in source row order
- Summary counts derived from the roster

These models are pure data structures with no I/O dependencies.
They are serialized to/from SQLite and Excel by the infrastructure layer.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, fields, replace
from typing import Any, Iterator


# ============================================================================
# Attendee Record
# ============================================================================


@dataclass(frozen=True)
class AttendeeRecord:
    """
    One row of the roster.

    Attributes:
        timestamp: Form submission time, used as the lookup key
        name: Attendee name
        mobile: Primary mobile number
        email: Primary email id
        adults: Number of adults attending
        children: Number of children (below 12) attending
        bathukamma: Whether the attendee is preparing a Bathukamma
        upi: UPI transaction id of the donation, if any
        first_time: Whether this is the attendee's first event
        source: How the attendee heard about the event
        is_present: Set once the attendee has checked in
    """

    timestamp: str = ""
    name: str = ""
    mobile: str = ""
    email: str = ""
    adults: str = ""
    children: str = ""
    bathukamma: str = ""
    upi: str = ""
    first_time: str = ""
    source: str = ""
    is_present: bool = False

    def mark_present(self) -> AttendeeRecord:
        """Return a copy of this record checked in."""
        if self.is_present:
            return self
        return replace(self, is_present=True)

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AttendeeRecord:
        """
        Build a record from its persisted form.

        Raises:
            ValueError: If the payload is not a mapping or has wrong types
        """
        if not isinstance(data, dict):
            raise ValueError(f"Attendee payload must be an object, got {type(data).__name__}")

        values: dict[str, Any] = {}
        for f in fields(cls):
            if f.name not in data:
                continue
            value = data[f.name]
            if f.name == "is_present":
                if not isinstance(value, bool):
                    raise ValueError(f"is_present must be a boolean, got {value!r}")
            elif not isinstance(value, str):
                raise ValueError(f"{f.name} must be a string, got {value!r}")
            values[f.name] = value
        return cls(**values)


# ============================================================================
# Roster
# ============================================================================


@dataclass(frozen=True)
class RosterSummary:
    """Attendance counts for one roster snapshot."""

    total: int = 0
    present: int = 0

    @property
    def absent(self) -> int:
        return self.total - self.present


class Roster:
    """
    Ordered, immutable collection of attendee records.

    Order is the source row order. Check-ins produce a new Roster;
    the original is never modified, so a snapshot handed to a reader
    stays valid.

    Usage:
        roster = Roster([AttendeeRecord(timestamp="T1", name="Asha")])
        record = roster.find("T1")
        roster = roster.with_checked_in("T1")
        print(roster.present_count)
    """

    __slots__ = ("_records",)

    def __init__(self, records: Iterator[AttendeeRecord] | list[AttendeeRecord] | tuple = ()):
        self._records: tuple[AttendeeRecord, ...] = tuple(records)

    @classmethod
    def empty(cls) -> Roster:
        return cls(())

    @property
    def records(self) -> tuple[AttendeeRecord, ...]:
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[AttendeeRecord]:
        return iter(self._records)

    def __bool__(self) -> bool:
        return bool(self._records)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Roster):
            return NotImplemented
        return self._records == other._records

    def __hash__(self) -> int:
        return hash(self._records)

    def __repr__(self) -> str:
        return f"Roster(total={self.total}, present={self.present_count})"

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def find(self, timestamp: str) -> AttendeeRecord | None:
        """Return the first record with this timestamp, or None."""
        for record in self._records:
            if record.timestamp == timestamp:
                return record
        return None

    def duplicate_keys(self) -> list[str]:
        """Timestamps that appear more than once (only the first is reachable)."""
        counts = Counter(record.timestamp for record in self._records)
        return [key for key, count in counts.items() if count > 1]

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def with_checked_in(self, timestamp: str) -> Roster:
        """
        Return a roster where the record matching timestamp is present.

        Only the first match is touched, mirroring lookup. If nothing
        matches, or the record is already present, self is returned.
        """
        for idx, record in enumerate(self._records):
            if record.timestamp != timestamp:
                continue
            if record.is_present:
                return self
            updated = list(self._records)
            updated[idx] = record.mark_present()
            return Roster(updated)
        return self

    # ------------------------------------------------------------------
    # Derived counts
    # ------------------------------------------------------------------

    @property
    def total(self) -> int:
        return len(self._records)

    @property
    def present_count(self) -> int:
        return sum(1 for record in self._records if record.is_present)

    @property
    def absent_count(self) -> int:
        return self.total - self.present_count

    def summary(self) -> RosterSummary:
        return RosterSummary(total=self.total, present=self.present_count)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_list(self) -> list[dict[str, Any]]:
        return [record.to_dict() for record in self._records]

    @classmethod
    def from_list(cls, data: Any) -> Roster:
        """
        Build a roster from its persisted form.

        Raises:
            ValueError: If the payload is not a list of attendee objects
        """
        if not isinstance(data, list):
            raise ValueError(f"Roster payload must be a list, got {type(data).__name__}")
        return cls(AttendeeRecord.from_dict(item) for item in data)
