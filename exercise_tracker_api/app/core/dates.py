"""
Date parsing and formatting helpers.

All dates are handled as naive ``datetime`` objects in UTC.  They are
stored as fixed‑width ISO strings (microsecond precision), which makes
string comparison in SQL equivalent to chronological comparison, and
rendered to clients either as a calendar string (``"Mon Jan 01 2024"``)
or, for raw documents, as an ISO timestamp with a ``Z`` suffix.
"""

from datetime import date, datetime, timezone
from typing import Any, Optional

from .errors import StoreError

CALENDAR_FORMAT = "%a %b %d %Y"


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _cast_error(value: Any, path: str) -> StoreError:
    return StoreError(f'Cast to date failed for value "{value}" at path "{path}"')


def parse_date(value: Any = None, path: str = "date") -> datetime:
    """Convert ``value`` into a naive UTC ``datetime``.

    ``None`` and the empty string mean "now".  Strings must be ISO 8601
    dates or datetimes; a trailing ``Z`` or an explicit offset is
    converted to UTC.  Numbers are read as milliseconds since the epoch.
    Anything else raises ``StoreError``.
    """
    if value is None or value == "":
        return utcnow()
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, bool):
        raise _cast_error(value, path)
    if isinstance(value, (int, float)):
        try:
            parsed = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            raise _cast_error(value, path)
        return parsed.replace(tzinfo=None)
    if not isinstance(value, str):
        raise _cast_error(value, path)

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise _cast_error(value, path)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def to_calendar_string(value: Any = None) -> str:
    """Parse ``value`` and render it as e.g. ``"Sun Jun 02 2024"``."""
    return parse_date(value).strftime(CALENDAR_FORMAT)


def to_iso_string(value: Any = None) -> str:
    """Parse ``value`` and render it as e.g. ``"2024-06-02T00:00:00.000Z"``."""
    return parse_date(value).isoformat(timespec="milliseconds") + "Z"


def to_storage(value: datetime) -> str:
    return value.isoformat(timespec="microseconds")


def parse_bound(value: Optional[str], path: str) -> Optional[str]:
    """Convert an optional query bound into its storage representation.

    Missing or empty bounds return ``None`` (no filter).  Unparseable
    values raise ``StoreError`` rather than being compared as text.
    """
    if value is None or value == "":
        return None
    return to_storage(parse_date(value, path=path))
