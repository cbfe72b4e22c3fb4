"""
Timezone utilities.

All DateTime columns hold naive UTC. GraphQL inputs may arrive with an
offset and upstream payloads carry ISO strings with one; both are folded
to naive UTC before they reach a query.
"""
from datetime import datetime, timezone
from typing import Optional


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Convert an aware datetime to naive UTC; naive values are assumed UTC.

    Example:
        >>> to_naive_utc(datetime.fromisoformat("2025-01-10T20:00:00+01:00"))
        datetime.datetime(2025, 1, 10, 19, 0)
    """
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def parse_iso_utc(value: str) -> datetime:
    """Parse an ISO-8601 string (``Z`` suffix allowed) to naive UTC."""
    return to_naive_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))


def isoformat_utc(value: datetime) -> str:
    """Render a naive UTC datetime with an explicit offset."""
    return value.replace(tzinfo=timezone.utc).isoformat()
