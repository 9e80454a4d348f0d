import json

import pytest

from cabshare.jobs import run_search
from cabshare.sources.sheets.http import SheetsFetchError
from cabshare.types import RawRecord


def records():
    return [
        RawRecord(
            section_label="Arrival before 25th August",
            date_text="2025. 8. 20",
            time_text="9:10",
            name="Alice",
            location_text="Gare du Nord train station",
        ),
        RawRecord(
            section_label="Arrival before 25th August",
            date_text="2025. 8. 20",
            time_text="13:00",
            name="Bob",
            location_text="Gare du Nord train station",
        ),
    ]


class StubSource:
    def __init__(self, *args, **kwargs):
        pass

    def fetch_records(self):
        return records()


class FailingSource:
    def __init__(self, *args, **kwargs):
        pass

    def fetch_records(self):
        raise SheetsFetchError("Sheets API returned HTTP 403")


def test_search_prints_matches(monkeypatch, capsys):
    monkeypatch.setattr(run_search, "SheetsSource", StubSource)
    code = run_search.main(
        ["--date", "2025-08-20", "--time", "09:00", "--location", "Gare du Nord train station"]
    )
    assert code == 0
    out = json.loads(capsys.readouterr().out)
    assert [m["name"] for m in out["matches"]] == ["Alice"]
    assert out["matches"][0]["arrival_time"] == "9:10 AM"


def test_list_prints_entries(monkeypatch, capsys):
    monkeypatch.setattr(run_search, "SheetsSource", StubSource)
    assert run_search.main(["--list"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert [e["name"] for e in out["entries"]] == ["Alice", "Bob"]


def test_requires_date_and_time():
    with pytest.raises(SystemExit):
        run_search.main(["--location", "CDG Airport"])


def test_upstream_failure(monkeypatch, capsys):
    monkeypatch.setattr(run_search, "SheetsSource", FailingSource)
    assert run_search.main(["--list"]) == 1
    assert "HTTP 403" in capsys.readouterr().err
