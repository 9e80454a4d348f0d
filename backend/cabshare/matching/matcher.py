from __future__ import annotations

import logging
from typing import Iterable, Optional

from cabshare.parsing.normalizer import normalize
from cabshare.types import MatchQuery, MatchResult, RawRecord
from cabshare.utils.time import format_arrival_time, minutes_between

logger = logging.getLogger(__name__)

MATCH_WINDOW_MINUTES = 90

NAME_FALLBACK = "Name not specified"
LUGGAGE_FALLBACK = "Not specified"


def normalize_terminal(value: Optional[str]) -> str:
    """
    "T1", "t1" and "1" compare equal. Only the first "t" is dropped,
    so "Terminal 2" becomes "erminal 2".
    """
    return (value or "").strip().lower().replace("t", "", 1)


def is_airport(location: str) -> bool:
    return "airport" in location.lower()


def within_window(minutes: int, window_minutes: int = MATCH_WINDOW_MINUTES) -> bool:
    return minutes <= window_minutes


def display_name(record: RawRecord) -> str:
    return record.name.strip() or NAME_FALLBACK


def display_luggage(record: RawRecord) -> str:
    return record.luggage_text.strip() or LUGGAGE_FALLBACK


def find_matches(
    query: MatchQuery,
    candidates: Iterable[RawRecord],
    *,
    strict_terminal: bool = False,
    default_year: Optional[int] = None,
) -> list[MatchResult]:
    """
    Filter candidates to those arriving within MATCH_WINDOW_MINUTES of the query.

    With a query location, candidates must name exactly that location; the
    terminal is only compared when strict_terminal is set and the location is
    an airport. Without a location, candidates are matched on terminal alone.
    Input order is preserved.
    """
    location_mode = bool(query.location)
    query_terminal = normalize_terminal(query.terminal)

    out: list[MatchResult] = []
    unparsed = 0

    for rec in candidates:
        if not rec.shareable:
            continue

        location = rec.location_text.strip()
        terminal = rec.terminal_text.strip()
        terminal_matches = normalize_terminal(terminal) == query_terminal

        if location_mode:
            if not location or location != query.location:
                continue
            if strict_terminal and is_airport(location) and not terminal_matches:
                continue
        else:
            if not terminal or not terminal_matches:
                continue

        ts = normalize(rec.date_text, rec.time_text, rec.section_label, default_year=default_year)
        if ts is None:
            unparsed += 1
            continue

        diff = minutes_between(query.arrival, ts.to_datetime())
        if not within_window(diff):
            continue

        out.append(
            MatchResult(
                name=display_name(rec),
                arrival_time=format_arrival_time(ts),
                location=location,
                terminal=terminal,
                contact=rec.contact_text.strip(),
                luggage=display_luggage(rec),
            )
        )

    logger.debug("find_matches matched=%d unparsed=%d strict_terminal=%s", len(out), unparsed, strict_terminal)
    return out
