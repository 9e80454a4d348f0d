from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class RawRecord:
    # One spreadsheet row, cells as typed by contributors
    section_label: str               # sheet tab the row came from
    date_text: str
    time_text: str

    name: str = ""
    location_text: str = ""          # airport / station
    terminal_text: str = ""
    contact_text: str = ""
    luggage_text: str = ""
    share_flag: str = ""             # "no" opts the row out

    @property
    def shareable(self) -> bool:
        return self.share_flag.strip().lower() != "no"


@dataclass(frozen=True)
class CanonicalTimestamp:
    year: int
    month: int                       # 1..12
    day: int
    hour: int                        # 0..23
    minute: int

    def to_datetime(self) -> datetime:
        # naive, Europe/Paris wall clock
        return datetime(self.year, self.month, self.day, self.hour, self.minute)


@dataclass(frozen=True)
class MatchQuery:
    arrival: datetime
    location: Optional[str] = None   # None => terminal-only matching
    terminal: str = ""


@dataclass(frozen=True)
class MatchResult:
    name: str
    arrival_time: str                # display string, e.g. "2:30 PM"
    location: str
    terminal: str
    contact: str
    luggage: str


@dataclass(frozen=True)
class Entry:
    date: str
    name: str
    arrival_time: str
    location: str
    terminal: str
    luggage: str
