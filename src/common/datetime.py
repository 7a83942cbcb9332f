"""Datetime utilities."""

from datetime import datetime, timedelta, timezone

from dateutil.parser import parse as parse_date

# Timezone abbreviations for feed date parsing
TZINFOS = {
    "EST": timezone(timedelta(hours=-5)),
    "EDT": timezone(timedelta(hours=-4)),
    "CST": timezone(timedelta(hours=-6)),
    "CDT": timezone(timedelta(hours=-5)),
    "MST": timezone(timedelta(hours=-7)),
    "MDT": timezone(timedelta(hours=-6)),
    "PST": timezone(timedelta(hours=-8)),
    "PDT": timezone(timedelta(hours=-7)),
    "GMT": timezone.utc,
    "UTC": timezone.utc,
    "BST": timezone(timedelta(hours=1)),
}

MONTH_ABBREVIATIONS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def parse_datetime(value) -> datetime:
    """Parse an RFC 2822 or ISO-ish date string; naive results are assumed UTC.

    Raises:
        ValueError: If the value cannot be parsed.
    """
    if isinstance(value, datetime):
        dt = value
    else:
        if not value or not str(value).strip():
            raise ValueError("Empty date string")
        try:
            dt = parse_date(str(value), tzinfos=TZINFOS)
        except (OverflowError, ValueError) as exc:
            raise ValueError(f"Unparseable date: {value!r}") from exc
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def format_display_date(value: datetime) -> str:
    """Format a datetime as "dd - Mon" (e.g. "05 - Mar") for the active table."""
    return f"{value.day:02d} - {MONTH_ABBREVIATIONS[value.month - 1]}"
