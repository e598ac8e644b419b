"""Fetch -> parse -> normalize, plus lookup of a single entry."""

from __future__ import annotations

from typing import Optional

import httpx

from feedcore.core.config import FeedOptions
from feedcore.core.errors import FeedError
from feedcore.core.logging import get_logger
from feedcore.ingestion.fetcher import fetch_bytes
from feedcore.ingestion.xml_tree import parse_xml
from feedcore.schemas.feed import Feed, FeedEntry
from feedcore.services.normalizer import normalize_feed

log = get_logger("services.feed")


async def fetch_feed(
    url: str,
    options: Optional[FeedOptions] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> Feed:
    """Fetch ``url`` and return its normalized Feed.

    Raises TransportError, HttpStatusError, ParseError or InvalidFeedFormatError;
    a failure at any stage aborts the whole call and no partial feed is returned.
    """
    options = options or FeedOptions()
    log.info(f"Fetching feed {url}")
    try:
        body = await fetch_bytes(url, options, client=client)
        tree = parse_xml(body, options)
        feed = normalize_feed(tree, options)
    except FeedError as exc:
        log.error(f"Error fetching feed {url}: {exc.message}")
        raise

    log.info(f"Fetched {feed.format} feed {url} | entries={len(feed.entries)}")
    return feed


def find_entry(feed: Feed, entry_id: str) -> Optional[FeedEntry]:
    """First entry whose id equals ``entry_id``."""
    return next((entry for entry in feed.entries if entry.id == entry_id), None)
