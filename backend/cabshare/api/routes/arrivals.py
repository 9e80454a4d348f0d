from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from cabshare.api.schemas.arrivals import (
    EntriesResponse,
    EntryOut,
    MatchOut,
    SearchRequest,
    SearchResponse,
)
from cabshare.core.config import MatchSettings
from cabshare.core.deps import SourceFactory, get_match_settings, get_source_factory
from cabshare.matching.entries import build_entries
from cabshare.matching.matcher import find_matches
from cabshare.sources.sheets.http import SheetsFetchError
from cabshare.types import MatchQuery
from cabshare.utils.time import parse_query_datetime

logger = logging.getLogger(__name__)

router = APIRouter(tags=["arrivals"])


@router.get("/entries", response_model=EntriesResponse)
def list_entries(source_factory: SourceFactory = Depends(get_source_factory)):
    try:
        records = source_factory().fetch_records()
    except SheetsFetchError:
        logger.exception("Fetching entries failed")
        raise HTTPException(status_code=500, detail="Failed to fetch full list.")

    entries = build_entries(records)
    logger.debug("entries records=%d shareable=%d", len(records), len(entries))

    return EntriesResponse(
        entries=[
            EntryOut(
                date=e.date,
                name=e.name,
                arrival_time=e.arrival_time,
                location=e.location,
                terminal=e.terminal,
                luggage=e.luggage,
            )
            for e in entries
        ]
    )


@router.post("/search", response_model=SearchResponse)
def search(
    body: SearchRequest,
    source_factory: SourceFactory = Depends(get_source_factory),
    settings: MatchSettings = Depends(get_match_settings),
):
    # Validate the query before touching the sheet
    try:
        arrival = parse_query_datetime(body.date, body.time)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid date format.")

    query = MatchQuery(
        arrival=arrival,
        location=(body.location or None),
        terminal=body.terminal or "",
    )

    try:
        records = source_factory().fetch_records()
    except SheetsFetchError:
        logger.exception("Fetching candidates failed")
        raise HTTPException(status_code=500, detail="Failed to perform search.")

    matches = find_matches(query, records, strict_terminal=settings.strict_terminal)
    logger.info(
        "search at=%s location=%r terminal=%r candidates=%d matches=%d",
        arrival.isoformat(),
        query.location,
        query.terminal,
        len(records),
        len(matches),
    )

    return SearchResponse(
        matches=[
            MatchOut(
                name=m.name,
                arrival_time=m.arrival_time,
                location=m.location,
                terminal=m.terminal,
                contact=m.contact,
                luggage=m.luggage,
            )
            for m in matches
        ]
    )
