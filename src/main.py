"""
Rollcall - Event Attendance Tracker

Imports a registration roster from Excel, checks attendees in by a scanned
or typed timestamp ID, keeps progress across sessions, and exports the
updated roster.
"""

import sys
from rollcall.interface.cli import main


if __name__ == "__main__":
    sys.exit(main())
