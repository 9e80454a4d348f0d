import logging
from typing import Callable

from fastapi import HTTPException

from cabshare.core.config import MatchSettings, load_match_settings
from cabshare.sources.base import BaseSource
from cabshare.sources.sheets.source import SheetsSource

logger = logging.getLogger(__name__)

SourceFactory = Callable[[], BaseSource]


def build_sheets_source() -> BaseSource:
    try:
        return SheetsSource()
    except RuntimeError as e:
        logger.error("Spreadsheet source misconfigured: %s", e)
        raise HTTPException(status_code=500, detail="Spreadsheet source is not configured.")


def get_source_factory() -> SourceFactory:
    # handlers build the source only once the request itself has been validated
    return build_sheets_source


def get_match_settings() -> MatchSettings:
    return load_match_settings()
