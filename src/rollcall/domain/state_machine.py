"""
State Machine for two-phase check-in.

A check-in is resolved first and confirmed second. This module holds THE
transition rules between those phases so every driver (CLI prompt, scan
loop, tests) follows the same path:

    IDLE -> CLASSIFIED -> CONFIRMED -> IDLE
                       -> CANCELLED -> IDLE

Architecture Note:
    - Pure domain logic - no I/O, no roster mutation
    - Only an ELIGIBLE classification may be confirmed
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from rollcall.domain.check_in import CheckInOutcome, CheckInResult


class CheckInPhase(Enum):
    """Phase of a check-in attempt."""

    IDLE = "idle"
    CLASSIFIED = "classified"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class InvalidTransition(Exception):
    """A check-in step was requested out of order."""


@dataclass(frozen=True)
class CheckInState:
    """
    Immutable snapshot of a check-in attempt.

    Attributes:
        phase: Current phase
        result: Classification held while CLASSIFIED and after
    """

    phase: CheckInPhase = CheckInPhase.IDLE
    result: CheckInResult | None = None

    @property
    def outcome(self) -> CheckInOutcome | None:
        return self.result.outcome if self.result else None


IDLE = CheckInState()


def classify(state: CheckInState, result: CheckInResult) -> CheckInState:
    """IDLE -> CLASSIFIED."""
    if state.phase is not CheckInPhase.IDLE:
        raise InvalidTransition(
            f"Cannot classify a new key while {state.phase.value}"
        )
    return CheckInState(phase=CheckInPhase.CLASSIFIED, result=result)


def confirm(state: CheckInState) -> CheckInState:
    """CLASSIFIED(ELIGIBLE) -> CONFIRMED."""
    if state.phase is not CheckInPhase.CLASSIFIED or state.result is None:
        raise InvalidTransition(f"Nothing to confirm while {state.phase.value}")
    if not state.result.outcome.can_confirm():
        raise InvalidTransition(
            f"Cannot confirm a {state.result.outcome.value} classification"
        )
    return CheckInState(phase=CheckInPhase.CONFIRMED, result=state.result)


def cancel(state: CheckInState) -> CheckInState:
    """CLASSIFIED -> CANCELLED (also dismisses NOT_FOUND / ALREADY_PRESENT)."""
    if state.phase is not CheckInPhase.CLASSIFIED:
        raise InvalidTransition(f"Nothing to cancel while {state.phase.value}")
    return CheckInState(phase=CheckInPhase.CANCELLED, result=state.result)


def finish(state: CheckInState) -> CheckInState:
    """CONFIRMED | CANCELLED -> IDLE."""
    if state.phase not in (CheckInPhase.CONFIRMED, CheckInPhase.CANCELLED):
        raise InvalidTransition(f"Cannot finish while {state.phase.value}")
    return IDLE
