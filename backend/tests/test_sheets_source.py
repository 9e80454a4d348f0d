import httpx
import pytest

from cabshare.sources.sheets.config import DEFAULT_SECTIONS, ColumnMap, SheetsConfig, load_config
from cabshare.sources.sheets.http import SheetsFetchError, mask_api_key
from cabshare.sources.sheets.rows import cell, is_placeholder_row, row_to_record, rows_to_records
from cabshare.sources.sheets.source import SheetsSource

COLUMNS = ColumnMap()
FULL_ROW = ["28 Aug", "Alice", "14:30", "CDG Airport", "T2", "+33 6", "yes", "", "1 suitcase"]


def make_cfg(**kw) -> SheetsConfig:
    fields = dict(
        base_url="https://sheets.example.test/v4",
        api_key="secret-key-1234",
        spreadsheet_id="SHEET",
        sections=DEFAULT_SECTIONS,
        range_columns="A:I",
    )
    fields.update(kw)
    return SheetsConfig(**fields)


class TestRows:
    def test_full_row_maps_positionally(self):
        r = row_to_record(FULL_ROW, "Arrival before 25th August", COLUMNS)
        assert r is not None
        assert r.section_label == "Arrival before 25th August"
        assert r.date_text == "28 Aug"
        assert r.name == "Alice"
        assert r.time_text == "14:30"
        assert r.location_text == "CDG Airport"
        assert r.terminal_text == "T2"
        assert r.contact_text == "+33 6"
        assert r.share_flag == "yes"
        assert r.luggage_text == "1 suitcase"

    def test_short_row_reads_blank(self):
        r = row_to_record(["28 Aug", "Bob", "9:00"], "tab", COLUMNS)
        assert r is not None
        assert r.location_text == ""
        assert r.luggage_text == ""
        assert r.shareable

    def test_placeholder_rows(self):
        assert is_placeholder_row([], COLUMNS)
        assert is_placeholder_row(["", "Carol"], COLUMNS)
        assert is_placeholder_row(["Date", "Name", "Time"], COLUMNS)
        assert not is_placeholder_row(["28"], COLUMNS)

    def test_cell_tolerates_none_and_numbers(self):
        assert cell([None, 28], 0) == ""
        assert cell([None, 28], 1) == "28"
        assert cell([None, 28], 7) == ""

    def test_rows_to_records_skips_headers(self):
        rows = [["Date", "Name"], FULL_ROW, [], ["", "ghost"], ["29 Aug", "Dan", "10:00"]]
        records = rows_to_records(rows, "tab", COLUMNS)
        assert [r.name for r in records] == ["Alice", "Dan"]


class TestConfig:
    def test_missing_credentials(self, monkeypatch):
        monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
        monkeypatch.delenv("GOOGLE_SHEET_ID", raising=False)
        with pytest.raises(RuntimeError):
            load_config()

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_API_KEY", "k")
        monkeypatch.setenv("GOOGLE_SHEET_ID", "s")
        monkeypatch.setenv("SHEETS_SECTIONS", "Arrivals August ; Arrivals September;")
        monkeypatch.setenv("SHEETS_READ_TIMEOUT_SECONDS", "5")
        cfg = load_config()
        assert cfg.sections == ("Arrivals August", "Arrivals September")
        assert cfg.read_timeout == 5.0
        assert cfg.base_url == "https://sheets.googleapis.com/v4"
        assert cfg.ranges() == ["'Arrivals August'!A:I", "'Arrivals September'!A:I"]

    def test_default_sections(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_API_KEY", "k")
        monkeypatch.setenv("GOOGLE_SHEET_ID", "s")
        monkeypatch.delenv("SHEETS_SECTIONS", raising=False)
        assert load_config().sections == DEFAULT_SECTIONS


class TestSheetsSource:
    def test_batch_get_request_and_mapping(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["ranges"] = request.url.params.get_list("ranges")
            seen["key"] = request.url.params.get("key")
            return httpx.Response(
                200,
                json={
                    "spreadsheetId": "SHEET",
                    "valueRanges": [
                        {"range": "a", "values": [["Date", "Name"], FULL_ROW]},
                        {"range": "b", "values": [["2025. 8. 30", "Eve", "8:00", "Orly Airport"]]},
                    ],
                },
            )

        source = SheetsSource(make_cfg(), transport=httpx.MockTransport(handler))
        records = source.fetch_records()

        assert seen["path"] == "/v4/spreadsheets/SHEET/values:batchGet"
        assert seen["ranges"] == [
            "'Arrival before 25th August'!A:I",
            "'Arrival on/after 25th August'!A:I",
        ]
        assert seen["key"] == "secret-key-1234"
        assert [(r.name, r.section_label) for r in records] == [
            ("Alice", "Arrival before 25th August"),
            ("Eve", "Arrival on/after 25th August"),
        ]

    def test_missing_value_ranges_are_empty_sections(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"valueRanges": [{"range": "a"}]})

        source = SheetsSource(make_cfg(), transport=httpx.MockTransport(handler))
        sections = source.fetch_sections()
        assert [(s.label, s.rows) for s in sections] == [(label, []) for label in DEFAULT_SECTIONS]

    def test_http_error_status(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(403, json={"error": {"message": "API key not valid"}})

        source = SheetsSource(make_cfg(), transport=httpx.MockTransport(handler))
        with pytest.raises(SheetsFetchError):
            source.fetch_records()

    def test_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        source = SheetsSource(make_cfg(), transport=httpx.MockTransport(handler))
        with pytest.raises(SheetsFetchError):
            source.fetch_records()

    def test_non_json_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>oops</html>")

        source = SheetsSource(make_cfg(), transport=httpx.MockTransport(handler))
        with pytest.raises(SheetsFetchError):
            source.fetch_records()

    def test_api_key_is_masked_in_logs(self):
        masked = mask_api_key(httpx.URL("https://sheets.example.test/v4/x?key=secret-key-1234"))
        assert "secret-key-1234" not in masked
        assert "1234" in masked

    @pytest.mark.parametrize(
        "payload",
        [
            {"valueRanges": ["oops"]},
            {"valueRanges": [{"values": "not rows"}]},
            {"valueRanges": [{"values": ["28 Aug", "Alice"]}]},
        ],
    )
    def test_malformed_value_ranges(self, payload):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=payload)

        source = SheetsSource(make_cfg(), transport=httpx.MockTransport(handler))
        with pytest.raises(SheetsFetchError):
            source.fetch_records()
