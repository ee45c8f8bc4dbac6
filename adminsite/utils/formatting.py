from datetime import date, datetime, timezone
from typing import Optional, Union

DateLike = Union[str, int, float, date, datetime]


def format_currency(amount: float) -> str:
    """Format an amount in Kenyan shillings with no decimals, e.g. ``KES 1,500``."""
    sign = '-' if amount < 0 else ''
    return f"{sign}KES {abs(round(amount)):,}"


def to_datetime(value: DateLike) -> datetime:
    """Parse an ISO string, epoch milliseconds or date into a datetime."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    # fromisoformat does not accept the trailing Z before Python 3.11
    return datetime.fromisoformat(value.replace('Z', '+00:00'))


def format_date(value: DateLike, include_time: bool = False) -> str:
    """``5 Jan 2026``, or ``5 Jan 2026, 14:30`` with ``include_time``."""
    dt = to_datetime(value)
    text = f"{dt.day} {dt.strftime('%b %Y')}"
    if include_time:
        text += dt.strftime(', %H:%M')
    return text


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'s' if count > 1 else ''} ago"


def time_ago(value: DateLike, now: Optional[datetime] = None) -> str:
    """Human relative time, e.g. ``3 hours ago``."""
    dt = to_datetime(value)
    if now is None:
        now = datetime.now(dt.tzinfo)
    seconds = int((now - dt).total_seconds())

    if seconds < 60:
        return 'just now'
    minutes = seconds // 60
    if minutes < 60:
        return _plural(minutes, 'minute')
    hours = minutes // 60
    if hours < 24:
        return _plural(hours, 'hour')
    days = hours // 24
    if days < 7:
        return _plural(days, 'day')
    weeks = days // 7
    if weeks < 4:
        return _plural(weeks, 'week')
    months = days // 30
    if months < 12:
        return _plural(months, 'month')
    return _plural(days // 365, 'year')
