"""
Check-In Session.

Drives the two-phase check-in state machine against the state manager:
a key is submitted and classified, then the operator confirms or cancels.
Scanned and typed keys go through the same path.
"""

from __future__ import annotations

import logging

from rollcall.application.roster_manager import RosterStateManager
from rollcall.domain import state_machine
from rollcall.domain.check_in import CheckInResult
from rollcall.domain.state_machine import CheckInPhase, CheckInState

logger = logging.getLogger(__name__)


class CheckInSession:
    """
    One operator's check-in desk.

    Usage:
        session = CheckInSession(manager)
        result = session.submit(key)
        if result.outcome.can_confirm():
            session.confirm()
        else:
            session.cancel()
    """

    def __init__(self, manager: RosterStateManager):
        self.manager = manager
        self._state = state_machine.IDLE

    @property
    def state(self) -> CheckInState:
        return self._state

    @property
    def phase(self) -> CheckInPhase:
        return self._state.phase

    @property
    def pending(self) -> CheckInResult | None:
        """Classification awaiting confirm/cancel, if any."""
        if self._state.phase is CheckInPhase.CLASSIFIED:
            return self._state.result
        return None

    def submit(self, key: str) -> CheckInResult:
        """
        Classify a key (IDLE -> CLASSIFIED).

        Raises:
            InvalidTransition: If a previous key is still pending
            ValueError: If the key is blank
        """
        if self._state.phase is not CheckInPhase.IDLE:
            raise state_machine.InvalidTransition(
                f"Cannot classify a new key while {self._state.phase.value}"
            )
        result = self.manager.attempt_check_in(key)
        self._state = state_machine.classify(self._state, result)
        return result

    def confirm(self) -> CheckInResult:
        """
        Apply the pending ELIGIBLE classification (CLASSIFIED -> CONFIRMED -> IDLE).

        Raises:
            InvalidTransition: If nothing eligible is pending
        """
        confirmed = state_machine.confirm(self._state)
        result = self.manager.confirm_check_in(confirmed.result.key)
        self._state = state_machine.finish(confirmed)
        return result

    def cancel(self) -> None:
        """Drop the pending classification (CLASSIFIED -> CANCELLED -> IDLE)."""
        cancelled = state_machine.cancel(self._state)
        if cancelled.result is not None:
            logger.debug("Check-in for %r cancelled", cancelled.result.key)
        self._state = state_machine.finish(cancelled)
