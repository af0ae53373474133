import re
from datetime import datetime, timezone
from typing import Any, Optional

_TZ_OFFSET_PATTERN = re.compile(r"([+-]\d{2})(\d{2})$")


def parse_jira_datetime(value: Any) -> Optional[datetime]:
    """
    Parse a JIRA timestamp, handling its various timezone formats.

    Accepts ``2025-07-18T18:43:31.570Z``, ``2025-07-18T18:43:31.570-0300``,
    ``2025-07-18T18:43:31.570-03:00``, naive strings (interpreted as host local
    time) and ``datetime`` instances.

    Args:
        value (Any): Timestamp string or datetime.

    Returns:
        Optional[datetime]: Parsed datetime, or None when the value cannot be parsed.
    """
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        return None

    date_string = value.strip()
    if date_string.endswith("Z"):
        date_string = date_string[:-1] + "+00:00"
    else:
        # Jira sends -0300 / +0000; fromisoformat wants -03:00
        date_string = _TZ_OFFSET_PATTERN.sub(r"\1:\2", date_string) if "T" in date_string else date_string

    try:
        return datetime.fromisoformat(date_string)
    except ValueError:
        return None


def to_epoch_ms(value: Any) -> Optional[float]:
    """Milliseconds since the epoch for a timestamp, or None when unparseable."""
    parsed = parse_jira_datetime(value)
    if parsed is None:
        return None
    try:
        return parsed.timestamp() * 1000
    except (OverflowError, OSError, ValueError):
        return None


def to_iso_string(value: datetime) -> str:
    """UTC ISO-8601 string with millisecond precision and a ``Z`` suffix."""
    utc_value = value.astimezone(timezone.utc)
    return utc_value.isoformat(timespec="milliseconds").replace("+00:00", "Z")
