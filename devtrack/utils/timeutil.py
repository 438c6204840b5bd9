"""Date/time helpers bound to the configured reference timezone."""

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo


def reference_tz(name: str) -> ZoneInfo:
    return ZoneInfo(name)


def now_in(tz_name: str) -> datetime:
    return datetime.now(reference_tz(tz_name))


def today_in(tz_name: str) -> date:
    return now_in(tz_name).date()


def as_aware(value: datetime) -> datetime:
    """SQLite hands timestamps back naive; they were written as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def start_of_month(now: datetime) -> datetime:
    """Midnight on the first day of ``now``'s month, in ``now``'s timezone."""
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
