import os
from dataclasses import dataclass, field

DEFAULT_SECTIONS = (
    "Arrival before 25th August",
    "Arrival on/after 25th August",
)


@dataclass(frozen=True)
class ColumnMap:
    # positional contract with the sheet layout; keep in sync with the tabs
    date: int = 0
    name: int = 1
    time: int = 2
    location: int = 3
    terminal: int = 4
    contact: int = 5
    share: int = 6
    luggage: int = 8


@dataclass(frozen=True)
class SheetsConfig:
    base_url: str
    api_key: str
    spreadsheet_id: str

    sections: tuple[str, ...]
    range_columns: str
    columns: ColumnMap = field(default_factory=ColumnMap)

    connect_timeout: float = 10.0
    read_timeout: float = 30.0

    def ranges(self) -> list[str]:
        return [f"'{label}'!{self.range_columns}" for label in self.sections]


def _sections_from_env(raw: str | None) -> tuple[str, ...]:
    if not raw:
        return DEFAULT_SECTIONS
    labels = tuple(s.strip() for s in raw.split(";") if s.strip())
    return labels or DEFAULT_SECTIONS


def load_config() -> SheetsConfig:
    api_key = os.getenv("GOOGLE_API_KEY")
    spreadsheet_id = os.getenv("GOOGLE_SHEET_ID")
    if not api_key or not spreadsheet_id:
        raise RuntimeError("GOOGLE_API_KEY/GOOGLE_SHEET_ID not set")

    return SheetsConfig(
        base_url=os.getenv("SHEETS_BASE_URL", "https://sheets.googleapis.com/v4"),
        api_key=api_key,
        spreadsheet_id=spreadsheet_id,
        sections=_sections_from_env(os.getenv("SHEETS_SECTIONS")),
        range_columns=os.getenv("SHEETS_RANGE_COLUMNS", "A:I"),
        connect_timeout=float(os.getenv("SHEETS_CONNECT_TIMEOUT_SECONDS", "10")),
        read_timeout=float(os.getenv("SHEETS_READ_TIMEOUT_SECONDS", "30")),
    )
