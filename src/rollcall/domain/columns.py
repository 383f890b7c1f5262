"""
Spreadsheet column mapping.

The registration sheet is a Google Forms response export. Its header texts
are the form questions, copied here exactly (including trailing spaces and
doubled spaces) because matching is by exact header text.
"""

from __future__ import annotations

# Header text -> AttendeeRecord field, in export order
SOURCE_COLUMNS: dict[str, str] = {
    "Timestamp": "timestamp",
    "Please mention your name ": "name",
    "Please mention your primary mobile number WITHOUT country code (e.g. 9876543210)": "mobile",
    "Please mention your email id  (Primary) ": "email",
    "How many of you are attending the event (Adults) ? ": "adults",
    "How many of you are attending the event (Children below 12 years) ? ": "children",
    "Are you preparing Bathukamma for the event?": "bathukamma",
    "Please share UPI traction ID if donation done. ": "upi",
    "Are you attending the KTCA Bathukamma event for the first time? ": "first_time",
    "How do you come across about KTCA Bangalore Bathukamma event? ": "source",
}

# Attendance column appended by the exporter
PRESENT_COLUMN = "Present"

# Values read back as "present" when restoring an exported roster
PRESENT_TRUE_VALUES = frozenset({"true", "yes", "y", "1", "✓", "present"})


def header_for(field_name: str) -> str:
    """Return the source header text for a record field."""
    for header, name in SOURCE_COLUMNS.items():
        if name == field_name:
            return header
    raise KeyError(field_name)


def export_headers() -> list[str]:
    """Header row written by the exporter."""
    return [*SOURCE_COLUMNS.keys(), PRESENT_COLUMN]
