"""Date helpers: formatDate, relativeTime.

Accepted inputs are ``datetime``/``date`` objects, ISO 8601 strings and
numbers (milliseconds since the epoch). Anything unparseable renders as
an empty string.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date, datetime, timezone
from typing import Any

from vitrine.template.helpers import is_number


def to_datetime(value: Any) -> datetime | None:
    """Best-effort conversion to a local ``datetime``; ``None`` when invalid."""
    if isinstance(value, datetime):
        result = value
    elif isinstance(value, date):
        result = datetime(value.year, value.month, value.day)
    elif is_number(value):
        try:
            result = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str) and value.strip():
        try:
            result = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None

    if result.tzinfo is not None:
        result = result.astimezone()
    return result


def format_date(value: Any, pattern: str = "YYYY-MM-DD") -> str:
    """Substitute ``YYYY MM DD HH mm ss`` in ``pattern``; each token once.

    Example:
        >>> format_date("2024-03-05T09:07:02", "DD/MM/YYYY HH:mm:ss")
        '05/03/2024 09:07:02'
    """
    moment = to_datetime(value)
    if moment is None:
        return ""
    tokens = (
        ("YYYY", f"{moment.year:04d}"),
        ("MM", f"{moment.month:02d}"),
        ("DD", f"{moment.day:02d}"),
        ("HH", f"{moment.hour:02d}"),
        ("mm", f"{moment.minute:02d}"),
        ("ss", f"{moment.second:02d}"),
    )
    result = str(pattern)
    for token, replacement in tokens:
        result = result.replace(token, replacement, 1)
    return result


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'s' if count > 1 else ''} ago"


def relative_time(value: Any, now: datetime | None = None) -> str:
    """Describe how long ago ``value`` was, in the largest whole unit.

    Example:
        >>> relative_time(datetime.now() - timedelta(hours=3))
        '3 hours ago'
    """
    moment = to_datetime(value)
    if moment is None:
        return ""
    if now is None:
        now = datetime.now(moment.tzinfo) if moment.tzinfo else datetime.now()

    seconds = int((now - moment).total_seconds() // 1)
    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24

    if days > 0:
        return _plural(days, "day")
    if hours > 0:
        return _plural(hours, "hour")
    if minutes > 0:
        return _plural(minutes, "minute")
    return "just now"


DATE_HELPERS: dict[str, Callable[..., Any]] = {
    "formatDate": format_date,
    "relativeTime": relative_time,
}
