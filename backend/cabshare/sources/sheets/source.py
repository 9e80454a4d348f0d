import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from cabshare.sources.base import BaseSource
from cabshare.types import RawRecord

from .config import SheetsConfig, load_config
from .http import SheetsFetchError, get_json, make_client
from .rows import rows_to_records

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SheetSection:
    label: str
    rows: list


class SheetsSource(BaseSource):
    """
    Google Sheets v4 reader:
      - GET /spreadsheets/{id}/values:batchGet with one range per arrival tab
      - rows mapped positionally through the configured ColumnMap
    """

    def __init__(self, cfg: Optional[SheetsConfig] = None, *, transport: Optional[httpx.BaseTransport] = None):
        self.cfg = cfg or load_config()
        self.transport = transport

        logger.debug(
            "Sheets configured base_url=%s sections=%d range_columns=%s timeouts(connect=%.1f read=%.1f)",
            self.cfg.base_url,
            len(self.cfg.sections),
            self.cfg.range_columns,
            self.cfg.connect_timeout,
            self.cfg.read_timeout,
        )

    def fetch_sections(self) -> list[SheetSection]:
        path = f"/spreadsheets/{self.cfg.spreadsheet_id}/values:batchGet"
        with make_client(self.cfg, transport=self.transport) as client:
            data = get_json(client, path, {"ranges": self.cfg.ranges()})

        value_ranges = data.get("valueRanges", []) or []
        if not isinstance(value_ranges, list):
            raise SheetsFetchError("valueRanges is not a list")

        # the API answers ranges in request order
        sections: list[SheetSection] = []
        for idx, label in enumerate(self.cfg.sections):
            vr = value_ranges[idx] if idx < len(value_ranges) else {}
            if not isinstance(vr, dict):
                raise SheetsFetchError(f"valueRanges[{idx}] is not an object")
            rows = vr.get("values", []) or []
            if not isinstance(rows, list) or not all(isinstance(r, list) for r in rows):
                raise SheetsFetchError(f"valueRanges[{idx}].values is not a list of rows")
            sections.append(SheetSection(label=label, rows=rows))

        logger.info(
            "Fetched %d sections rows=%s",
            len(sections),
            {s.label: len(s.rows) for s in sections},
        )
        return sections

    def fetch_records(self) -> list[RawRecord]:
        records: list[RawRecord] = []
        for section in self.fetch_sections():
            records.extend(rows_to_records(section.rows, section.label, self.cfg.columns))
        return records
