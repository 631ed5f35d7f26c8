"""UTC-everywhere time handling. Invoice dates are calendar dates taken in UTC."""

from datetime import date, datetime, timedelta, timezone


def now_utc() -> datetime:
    """
    Current time in UTC.

    Use this instead of datetime.now() everywhere.
    """
    return datetime.now(timezone.utc)


def today_utc() -> date:
    """Current calendar date in UTC."""
    return now_utc().date()


def days_from_today(days: int) -> date:
    """Calendar date `days` after today (UTC). Negative values go backwards."""
    return today_utc() + timedelta(days=days)


def parse_date(value: str) -> date:
    """
    Parse a stored date string.

    Accepts plain ISO dates ("2025-01-31") and full ISO datetimes, keeping
    only the date part.

    Raises ValueError if the string is neither.
    """
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
