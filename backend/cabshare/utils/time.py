from datetime import datetime
from typing import Optional

import pytz

from cabshare.types import CanonicalTimestamp

LOCAL_TZ = pytz.timezone("Europe/Paris")


def current_year(now: Optional[datetime] = None) -> int:
    """
    Calendar year in Paris. Sheet rows rarely carry a year, so this is the default.
    """
    if now is None:
        now = datetime.now(LOCAL_TZ)
    return now.year


def parse_query_datetime(date_str: str, time_str: str) -> datetime:
    """
    Combine "YYYY-MM-DD" and "HH:MM" from the search form into a naive Paris datetime.
    Raises ValueError when the pair is not a real instant.
    """
    date_str = (date_str or "").strip()
    time_str = (time_str or "").strip()
    if not date_str or not time_str:
        raise ValueError("date and time are required")

    dt = datetime.fromisoformat(f"{date_str}T{time_str}")
    if dt.tzinfo is not None:
        dt = dt.astimezone(LOCAL_TZ).replace(tzinfo=None)
    return dt.replace(second=0, microsecond=0)


def display_hour(hour: int) -> int:
    # 24h -> 12h: only hours past noon are shifted, midnight reads as 12
    if hour > 12:
        return hour - 12
    if hour == 0:
        return 12
    return hour


def format_arrival_time(ts: CanonicalTimestamp) -> str:
    """Short 12-hour clock form used across the UI, e.g. "2:30 PM"."""
    suffix = "PM" if ts.hour >= 12 else "AM"
    return f"{display_hour(ts.hour)}:{ts.minute:02d} {suffix}"


def minutes_between(a: datetime, b: datetime) -> int:
    """Absolute whole minutes between two naive datetimes, truncated."""
    return abs(int((a - b).total_seconds() / 60.0))
