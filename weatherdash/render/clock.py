"""City-local time formatting without a timezone database.

The provider gives a fixed UTC offset, not a zone name. We shift the UTC
instant by that offset and format the result as if it were UTC. DST is
never applied.
"""

from datetime import UTC, date, datetime

from weatherdash.models.common import utc_now

MISSING = "—"


def fmt_gmt_offset(seconds: int | float | None) -> str:
    """Offset as UTC+HH:MM."""
    if seconds is None or seconds != seconds:
        return "UTC±00:00"
    sign = "+" if seconds >= 0 else "-"
    total = abs(int(seconds))
    hours, rest = divmod(total, 3600)
    return f"UTC{sign}{hours:02d}:{rest // 60:02d}"


def _shifted(unix_seconds: float, offset_seconds: int | None) -> datetime:
    return datetime.fromtimestamp(unix_seconds + (offset_seconds or 0), UTC)


def fmt_local_clock(offset_seconds: int | None, now: datetime | None = None) -> str:
    """Current wall-clock time in the city, HH:MM."""
    if now is None:
        now = utc_now()
    return _shifted(now.timestamp(), offset_seconds).strftime("%H:%M")


def fmt_time_with_offset(unix_seconds: int | None, offset_seconds: int | None) -> str:
    """A UTC unix timestamp (e.g. sunrise) as city-local HH:MM."""
    if unix_seconds is None:
        return MISSING
    return _shifted(unix_seconds, offset_seconds).strftime("%H:%M")


def fmt_day_label(iso_date: str) -> str:
    """'2024-05-06T00:00:00.000Z' -> 'Mon, May 6'.

    The date is already city-local, so it's read back without any shift.
    """
    day = date.fromisoformat(iso_date[:10])
    return f"{day.strftime('%a, %b')} {day.day}"
