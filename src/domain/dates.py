"""
Date helpers for form input and stored values.

Forms send plain dates (YYYY-MM-DD); stored records may hold full ISO
datetimes, sometimes with an offset or a trailing Z.

Everything is compared as naive UTC: values without an offset are taken
as UTC, values with one are converted.
"""

from __future__ import annotations

from datetime import UTC, date, datetime


def to_utc_naive(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(UTC).replace(tzinfo=None)


def parse_datetime(value: str | None) -> datetime | None:
    """Parse an ISO date or datetime into a naive UTC datetime."""
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    return to_utc_naive(parsed)


def parse_date(value: str | None) -> date | None:
    parsed = parse_datetime(value)
    return parsed.date() if parsed else None


def date_only(value: str | None) -> str:
    """'2025-03-01T18:00:00Z' -> '2025-03-01' (form pre-fill)."""
    if not value:
        return ""
    return value.split("T")[0]
