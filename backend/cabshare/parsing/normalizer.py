"""
Date/time normalizer for hand-typed spreadsheet cells.

Contributors type arrival dates and times in whatever shape they like
("2025. 8. 28", "01/09/2025", "15th Friday", "28 Aug", "오후 2:30", "13.15").
The normalizer rebuilds a calendar instant from the pieces it can recognise
and returns None for anything it cannot pin down; callers drop those rows.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Literal, Optional

from cabshare.types import CanonicalTimestamp
from cabshare.utils.time import current_year

logger = logging.getLogger(__name__)

DateFormat = Literal["full_date", "slash_date", "ordinal_day", "day_month_name", "bare_day"]

MONTH_NAMES = (
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
)

# tab-name hints, checked in order
SECTION_MONTH_HINTS = (
    ("august", 8),
    ("september", 9),
)

KOREAN_MERIDIEM = (
    ("오전", "AM"),
    ("오후", "PM"),
)

FULL_DATE_RE = re.compile(r"(?<!\d)(\d{4})(?:\s*\.\s*|\s+)(\d{1,2})(?:\s*\.\s*|\s+)(\d{1,2})(?!\d)")
SLASH_DATE_RE = re.compile(r"(?<!\d)(\d{1,2})/(\d{1,2})(?:/(\d{4}))?(?![\d/])")
ORDINAL_DAY_RE = re.compile(r"(?<!\d)(\d{1,2})(?:st|nd|rd|th)\b", re.IGNORECASE)
DAY_MONTH_NAME_RE = re.compile(r"(?<!\d)(\d{1,2})(?:st|nd|rd|th)?\s*(?:of\s+)?([a-z]{3,})", re.IGNORECASE)
BARE_DAY_RE = re.compile(r"^\s*(\d{1,2})\s*$")
WORD_RE = re.compile(r"[a-z]{3,}", re.IGNORECASE)
YEAR_RE = re.compile(r"(?<!\d)((?:19|20)\d{2})(?!\d)")

# times are matched against the upper-cased date + time string
HHMM_MARKER_AFTER_RE = re.compile(r"(?<!\d)(\d{1,2}):(\d{2})(?!\d)\s*(AM|PM)(?![A-Z])")
HHMM_MARKER_BEFORE_RE = re.compile(r"(?<![A-Z])(AM|PM)\s*(\d{1,2}):(\d{2})(?!\d)")
HHMM_RE = re.compile(r"(?<!\d)(\d{1,2}):(\d{2})(?!\d)")
HOUR_MARKER_RE = re.compile(r"(?<![\d:.])(\d{1,2})\s*(AM|PM)(?![A-Z])")
DECIMAL_TIME_RE = re.compile(r"(?<![\d.])(\d{1,2})\.(\d{2})(?![\d.])")


@dataclass(frozen=True)
class DateParts:
    fmt: DateFormat
    day: int
    month: Optional[int] = None
    year: Optional[int] = None


def month_from_word(word: str) -> Optional[int]:
    """Map "Aug", "sept", "AUGUST" to 8/9/8. Words shorter than three letters never match."""
    w = word.lower()
    if len(w) < 3:
        return None
    for idx, name in enumerate(MONTH_NAMES, start=1):
        if name.startswith(w):
            return idx
    return None


def month_named_in(text: str) -> Optional[int]:
    for m in WORD_RE.finditer(text):
        month = month_from_word(m.group(0))
        if month:
            return month
    return None


def match_full_date(text: str) -> Optional[DateParts]:
    m = FULL_DATE_RE.search(text)
    if not m:
        return None
    return DateParts("full_date", day=int(m.group(3)), month=int(m.group(2)), year=int(m.group(1)))


def match_slash_date(text: str) -> Optional[DateParts]:
    # day-first: 01/09/2025 is the 1st of September
    m = SLASH_DATE_RE.search(text)
    if not m:
        return None
    year = int(m.group(3)) if m.group(3) else None
    return DateParts("slash_date", day=int(m.group(1)), month=int(m.group(2)), year=year)


def match_ordinal_day(text: str) -> Optional[DateParts]:
    m = ORDINAL_DAY_RE.search(text)
    if not m:
        return None

    # "25th August" is day-first and belongs to match_day_month_name;
    # "Aug 28th" names its month before the day
    month = month_named_in(text)
    if month is not None:
        if match_day_month_name(text) is not None:
            return None
        return DateParts("ordinal_day", day=int(m.group(1)), month=month)
    return DateParts("ordinal_day", day=int(m.group(1)))


def match_day_month_name(text: str) -> Optional[DateParts]:
    for m in DAY_MONTH_NAME_RE.finditer(text):
        month = month_from_word(m.group(2))
        if month:
            return DateParts("day_month_name", day=int(m.group(1)), month=month)
    return None


def match_bare_day(text: str) -> Optional[DateParts]:
    m = BARE_DAY_RE.match(text)
    if not m:
        return None
    return DateParts("bare_day", day=int(m.group(1)))


DATE_MATCHERS: tuple[tuple[DateFormat, Callable[[str], Optional[DateParts]]], ...] = (
    ("full_date", match_full_date),
    ("slash_date", match_slash_date),
    ("ordinal_day", match_ordinal_day),
    ("day_month_name", match_day_month_name),
    ("bare_day", match_bare_day),
)


def parse_date_parts(date_text: str) -> Optional[DateParts]:
    """First matcher in priority order that recognises the date cell wins."""
    for _fmt, matcher in DATE_MATCHERS:
        parts = matcher(date_text)
        if parts is not None:
            return parts
    return None


def month_from_section(section_label: str) -> Optional[int]:
    label = (section_label or "").lower()
    for hint, month in SECTION_MONTH_HINTS:
        if hint in label:
            return month
    return None


def working_time_string(date_text: str, time_text: str) -> str:
    s = f"{date_text} {time_text}"
    for korean, latin in KOREAN_MERIDIEM:
        s = s.replace(korean, latin)
    return s.upper()


def _apply_pm(hour: int, marker: str) -> int:
    if marker == "PM" and hour < 12:
        return hour + 12
    return hour


def parse_time_parts(date_text: str, time_text: str) -> Optional[tuple[int, int]]:
    """
    Returns (hour, minute) on a 24-hour clock, or None when no time shape is found.
    The hour is not range-checked here.
    """
    s = working_time_string(date_text, time_text)

    m = HHMM_MARKER_AFTER_RE.search(s)
    if m:
        return _apply_pm(int(m.group(1)), m.group(3)), int(m.group(2))

    m = HHMM_MARKER_BEFORE_RE.search(s)
    if m:
        return _apply_pm(int(m.group(2)), m.group(1)), int(m.group(3))

    m = HHMM_RE.search(s)
    if m:
        hour = int(m.group(1))
        # no adjacent marker: a PM anywhere in the cell still means afternoon
        if "PM" in s and hour < 12:
            hour += 12
        return hour, int(m.group(2))

    m = HOUR_MARKER_RE.search(s)
    if m:
        return _apply_pm(int(m.group(1)), m.group(2)), 0

    m = DECIMAL_TIME_RE.search(s)
    if m:
        return int(m.group(1)), int(m.group(2))

    return None


def normalize(
    date_text: Optional[str],
    time_text: Optional[str],
    section_label: Optional[str],
    *,
    default_year: Optional[int] = None,
) -> Optional[CanonicalTimestamp]:
    """
    Rebuild an arrival instant from a date cell, a time cell and the tab name.

    Never raises: anything ambiguous or impossible yields None.
    """
    date_text = (date_text or "").strip()
    time_text = (time_text or "").strip()
    section_label = section_label or ""

    if not date_text and not time_text:
        return None

    parts = parse_date_parts(date_text)
    if parts is None:
        return None

    month = parts.month
    if month is None:
        month = month_from_section(section_label)
    if month is None:
        return None

    year = parts.year
    if year is None:
        m = YEAR_RE.search(date_text)
        year = int(m.group(1)) if m else (default_year or current_year())

    hm = parse_time_parts(date_text, time_text)
    if hm is None:
        return None
    hour, minute = hm

    try:
        dt = datetime(year, month, parts.day, hour, minute)
    except ValueError:
        logger.debug(
            "Rejected impossible instant date=%r time=%r (y=%d m=%d d=%d %02d:%02d)",
            date_text,
            time_text,
            year,
            month,
            parts.day,
            hour,
            minute,
        )
        return None

    return CanonicalTimestamp(year=dt.year, month=dt.month, day=dt.day, hour=dt.hour, minute=dt.minute)
