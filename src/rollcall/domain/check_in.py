"""
Check-In Resolver.

Classifies a lookup key against a roster snapshot. This is a pure query:
it never marks anyone present. Marking happens in a separate, confirmed
step (see RosterStateManager.confirm_check_in) so the operator can see who
will be checked in before it happens.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from rollcall.domain.models import AttendeeRecord, Roster


class CheckInOutcome(Enum):
    """Classification of a lookup key."""

    NOT_FOUND = "not_found"
    ALREADY_PRESENT = "already_present"
    ELIGIBLE = "eligible"

    def can_confirm(self) -> bool:
        return self is CheckInOutcome.ELIGIBLE


@dataclass(frozen=True)
class CheckInResult:
    """
    Result of resolving a key.

    Attributes:
        outcome: How the key was classified
        record: Matching record (None when NOT_FOUND)
        key: The normalized key that was looked up
    """

    outcome: CheckInOutcome
    record: AttendeeRecord | None = None
    key: str = ""

    @property
    def display_name(self) -> str:
        if self.record is None:
            return ""
        return self.record.name.strip() or self.record.timestamp


def normalize_key(key: str) -> str:
    """
    Normalize a scanned or typed key.

    Raises:
        ValueError: If the key is blank
    """
    cleaned = (key or "").strip()
    if not cleaned:
        raise ValueError("Please enter a timestamp ID.")
    return cleaned


def resolve(roster: Roster, key: str) -> CheckInResult:
    """
    Resolve a lookup key against a roster.

    Exact match on timestamp; the first matching row wins when the source
    data contains duplicates.

    Args:
        roster: Roster snapshot to search
        key: Scanned or typed lookup key

    Returns:
        CheckInResult classified NOT_FOUND, ALREADY_PRESENT or ELIGIBLE

    Raises:
        ValueError: If the key is blank
    """
    cleaned = normalize_key(key)
    record = roster.find(cleaned)

    if record is None:
        return CheckInResult(outcome=CheckInOutcome.NOT_FOUND, key=cleaned)
    if record.is_present:
        return CheckInResult(
            outcome=CheckInOutcome.ALREADY_PRESENT, record=record, key=cleaned
        )
    return CheckInResult(outcome=CheckInOutcome.ELIGIBLE, record=record, key=cleaned)
