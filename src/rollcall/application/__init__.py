"""
Application layer package.

Contains the services that orchestrate attendance workflows.
Services coordinate between domain models and infrastructure.
"""

from rollcall.application.check_in_session import CheckInSession
from rollcall.application.roster_manager import RosterStateManager

__all__ = [
    "CheckInSession",
    "RosterStateManager",
]
