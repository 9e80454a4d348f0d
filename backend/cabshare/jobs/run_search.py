import argparse
import json
import sys
from dataclasses import asdict

from cabshare.core.config import load_match_settings
from cabshare.core.logging_setup import configure_logging_if_needed
from cabshare.matching.entries import build_entries
from cabshare.matching.matcher import find_matches
from cabshare.sources.sheets.http import SheetsFetchError
from cabshare.sources.sheets.source import SheetsSource
from cabshare.types import MatchQuery
from cabshare.utils.time import parse_query_datetime


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Search the shared arrivals sheet for cab-share matches")

    p.add_argument("--list", action="store_true", help="Print every shareable entry instead of searching")

    p.add_argument("--date", help="YYYY-MM-DD")
    p.add_argument("--time", help="HH:MM (24-hour)")
    p.add_argument("--location", help="Exact location text, e.g. 'CDG Airport'")
    p.add_argument("--terminal", default="", help="Terminal, e.g. T2")
    p.add_argument(
        "--strict-terminal",
        action="store_true",
        default=None,
        help="Require terminal equality for airport matches (default: MATCH_STRICT_TERMINAL)",
    )
    return p


def main(argv=None) -> int:
    p = build_parser()
    args = p.parse_args(argv)

    configure_logging_if_needed()

    if not args.list and not (args.date and args.time):
        p.error("--date and --time are required unless --list is given")

    query = None
    if not args.list:
        try:
            arrival = parse_query_datetime(args.date, args.time)
        except ValueError:
            p.error(f"Invalid date/time: {args.date} {args.time}")
        query = MatchQuery(arrival=arrival, location=args.location or None, terminal=args.terminal)

    try:
        records = SheetsSource().fetch_records()
    except (RuntimeError, SheetsFetchError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if query is None:
        out = {"entries": [asdict(e) for e in build_entries(records)]}
    else:
        strict = args.strict_terminal
        if strict is None:
            strict = load_match_settings().strict_terminal
        out = {"matches": [asdict(m) for m in find_matches(query, records, strict_terminal=strict)]}

    print(json.dumps(out, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
