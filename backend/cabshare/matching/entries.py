from typing import Iterable, Optional

from cabshare.matching.matcher import display_luggage, display_name
from cabshare.parsing.normalizer import normalize
from cabshare.types import Entry, RawRecord
from cabshare.utils.time import format_arrival_time

NOT_AVAILABLE = "N/A"


def build_entries(records: Iterable[RawRecord], *, default_year: Optional[int] = None) -> list[Entry]:
    """Every shareable record, in sheet order. Unparseable times show as N/A instead of being dropped."""
    out: list[Entry] = []
    for rec in records:
        if not rec.shareable:
            continue

        ts = normalize(rec.date_text, rec.time_text, rec.section_label, default_year=default_year)
        out.append(
            Entry(
                date=rec.date_text or NOT_AVAILABLE,
                name=display_name(rec),
                arrival_time=format_arrival_time(ts) if ts else NOT_AVAILABLE,
                location=rec.location_text.strip(),
                terminal=rec.terminal_text.strip(),
                luggage=display_luggage(rec),
            )
        )
    return out
