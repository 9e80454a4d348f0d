import logging
import time
from typing import Optional

import httpx

from .config import SheetsConfig

logger = logging.getLogger(__name__)


class SheetsFetchError(RuntimeError):
    """The spreadsheet could not be read (transport, HTTP status or payload shape)."""


def mask_api_key(url: httpx.URL) -> str:
    key = url.params.get("key")
    if not key:
        return str(url)
    masked = "****" if len(key) <= 6 else f"****{key[-4:]}"
    return str(url.copy_set_param("key", masked))


def log_request(request: httpx.Request) -> None:
    logger.debug("HTTP %s %s", request.method, mask_api_key(request.url))


def make_client(cfg: SheetsConfig, *, transport: Optional[httpx.BaseTransport] = None) -> httpx.Client:
    timeout = httpx.Timeout(cfg.read_timeout, connect=cfg.connect_timeout)
    return httpx.Client(
        base_url=cfg.base_url,
        timeout=timeout,
        params={"key": cfg.api_key},
        headers={"Accept": "application/json"},
        event_hooks={"request": [log_request]},
        transport=transport,
    )


def get_json(client: httpx.Client, path: str, params: dict) -> dict:
    """Single GET, no retries. Any failure surfaces as SheetsFetchError."""
    t0 = time.perf_counter()
    try:
        r = client.get(path, params=params)
        elapsed = time.perf_counter() - t0
        r.raise_for_status()
    except httpx.HTTPStatusError as e:
        snippet = (e.response.text or "")[:300]
        logger.error(
            "HTTP %d GET %s after %.2fs body_snippet=%r",
            e.response.status_code,
            path,
            time.perf_counter() - t0,
            snippet,
        )
        raise SheetsFetchError(f"Sheets API returned HTTP {e.response.status_code}") from e
    except httpx.HTTPError as e:
        logger.error(
            "%s GET %s after %.2fs error=%r",
            e.__class__.__name__,
            path,
            time.perf_counter() - t0,
            e,
        )
        raise SheetsFetchError(f"Sheets API request failed: {e.__class__.__name__}") from e

    if elapsed > 5:
        logger.info("GET %s completed in %.2fs status=%d (slow)", path, elapsed, r.status_code)
    else:
        logger.debug("GET %s completed in %.2fs status=%d", path, elapsed, r.status_code)

    try:
        data = r.json()
    except ValueError as e:
        raise SheetsFetchError("Sheets API returned a non-JSON body") from e
    if not isinstance(data, dict):
        raise SheetsFetchError("Sheets API returned an unexpected payload")
    return data
