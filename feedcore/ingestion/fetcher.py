"""HTTP retrieval of raw feed XML."""

from __future__ import annotations

from typing import Optional

import httpx

from feedcore.core.config import FeedOptions
from feedcore.core.errors import HttpStatusError, TransportError
from feedcore.core.logging import get_logger

log = get_logger("ingestion.fetcher")


async def _get(url: str, options: FeedOptions, client: Optional[httpx.AsyncClient]) -> httpx.Response:
    headers = {"User-Agent": options.user_agent}
    try:
        if client is not None:
            resp = await client.get(url, headers=headers, follow_redirects=True)
        else:
            async with httpx.AsyncClient(follow_redirects=True) as own_client:
                resp = await own_client.get(url, headers=headers)
    except (httpx.RequestError, httpx.InvalidURL) as exc:
        log.warning(f"Transport failure for {url}: {exc!r}")
        raise TransportError(url, str(exc) or exc.__class__.__name__) from exc

    if not resp.is_success:
        log.warning(f"Non-success status {resp.status_code} for {url}")
        raise HttpStatusError(url, resp.status_code)

    log.debug(f"Fetched {len(resp.content)} bytes from {url}")
    return resp


async def fetch_bytes(
    url: str,
    options: Optional[FeedOptions] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> bytes:
    """GET ``url`` once and return the undecoded body.

    The XML parser decodes it from the BOM or the ``<?xml encoding=...?>``
    declaration, which HTTP headers often get wrong. Uses the caller's client
    when one is given, otherwise a short-lived one with httpx default
    timeouts. No retries.
    """
    resp = await _get(url, options or FeedOptions(), client)
    return resp.content


async def fetch_text(
    url: str,
    options: Optional[FeedOptions] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> str:
    """Same as fetch_bytes, decoded by httpx from the response charset."""
    resp = await _get(url, options or FeedOptions(), client)
    return resp.text
