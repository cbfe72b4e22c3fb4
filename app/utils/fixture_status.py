"""
Fixture status vocabulary (API-Football short codes).

Status strings are copied verbatim from upstream; these sets only classify
them into the coarse buckets used for filtering.
"""
from typing import Optional

LIVE_STATUSES = ("1H", "2H", "HT", "ET", "P", "BT", "LIVE")
FINISHED_STATUSES = ("FT", "AET", "PEN", "AWD", "WO")
UPCOMING_STATUSES = ("TBD", "NS")

# Finished on the pitch; excludes awarded and walkover results
COMPLETED_STATUSES = ("FT", "AET", "PEN")

STATUS_LABELS = {
    "TBD": "Time To Be Defined",
    "NS": "Not Started",
    "1H": "First Half",
    "HT": "Halftime",
    "2H": "Second Half",
    "ET": "Extra Time",
    "BT": "Break Time",
    "P": "Penalty In Progress",
    "LIVE": "In Progress",
    "FT": "Full Time",
    "AET": "After Extra Time",
    "PEN": "After Penalties",
    "AWD": "Technical Loss",
    "WO": "Walkover",
    "PST": "Postponed",
    "CANC": "Cancelled",
    "ABD": "Abandoned",
    "SUSP": "Suspended",
    "INT": "Interrupted",
}


def is_live(status_short: Optional[str]) -> bool:
    return status_short in LIVE_STATUSES


def is_finished(status_short: Optional[str]) -> bool:
    return status_short in FINISHED_STATUSES


def is_upcoming(status_short: Optional[str]) -> bool:
    return status_short in UPCOMING_STATUSES


def status_text(status_short: str, elapsed: Optional[int] = None) -> str:
    """Display text: the minute for running halves, otherwise the label."""
    if status_short in ("1H", "2H", "ET", "LIVE") and elapsed is not None:
        return f"{elapsed}'"
    return STATUS_LABELS.get(status_short, status_short)
