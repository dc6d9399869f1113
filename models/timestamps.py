"""ISO-8601 conversion for stored timestamps."""

from datetime import datetime
from typing import Optional


def format_timestamp(value: datetime) -> str:
    return value.isoformat()


def parse_timestamp(value: Optional[str]) -> datetime:
    """
    Parse a stored timestamp into a naive local datetime.

    Records written by the browser build end in "Z"; those are converted to
    local time so they sort alongside naive timestamps.
    """
    if not value:
        return datetime.now()
    if value.endswith('Z'):
        value = value[:-1] + '+00:00'
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed
