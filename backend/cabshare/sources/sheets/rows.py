import logging
from typing import Optional

from cabshare.types import RawRecord

from .config import ColumnMap

logger = logging.getLogger(__name__)

HEADER_DATE_TEXT = "date"


def cell(row: list, idx: int) -> str:
    """Short rows are common (trailing blanks are omitted by the API); missing cells read as ""."""
    if idx < 0 or idx >= len(row):
        return ""
    value = row[idx]
    if value is None:
        return ""
    return str(value)


def is_placeholder_row(row: Optional[list], columns: ColumnMap) -> bool:
    if not row:
        return True
    date_text = cell(row, columns.date).strip()
    return not date_text or date_text.lower() == HEADER_DATE_TEXT


def row_to_record(row: Optional[list], section_label: str, columns: ColumnMap) -> Optional[RawRecord]:
    if row is None or is_placeholder_row(row, columns):
        return None

    return RawRecord(
        section_label=section_label,
        date_text=cell(row, columns.date),
        time_text=cell(row, columns.time),
        name=cell(row, columns.name),
        location_text=cell(row, columns.location),
        terminal_text=cell(row, columns.terminal),
        contact_text=cell(row, columns.contact),
        luggage_text=cell(row, columns.luggage),
        share_flag=cell(row, columns.share),
    )


def rows_to_records(rows: list, section_label: str, columns: ColumnMap) -> list[RawRecord]:
    records: list[RawRecord] = []
    skipped = 0
    for row in rows:
        rec = row_to_record(row, section_label, columns)
        if rec is None:
            skipped += 1
            continue
        records.append(rec)

    logger.debug("section %r: records=%d skipped=%d", section_label, len(records), skipped)
    return records
