"""Feed routes - list a feed and look up one of its entries."""

import time
import uuid
from typing import Optional

import httpx
from fastapi import APIRouter, Depends, HTTPException, Query

from feedcore.api.deps import get_feed_options, get_http_client
from feedcore.core.config import FeedOptions, settings
from feedcore.schemas.api import EntryOut, FeedOut
from feedcore.services.feed_service import fetch_feed, find_entry

router = APIRouter(prefix="/feed", tags=["feed"])

URL_QUERY = Query(None, description="RSS 2.0 or Atom feed URL (defaults to DEFAULT_FEED_URL)")


@router.get("", response_model=FeedOut, response_model_exclude_none=True)
async def get_feed(
    url: Optional[str] = URL_QUERY,
    options: FeedOptions = Depends(get_feed_options),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    """
    Fetch and normalize a feed.

    Each entry carries its raw fields plus display labels
    (relative/absolute publish date, description with tags stripped).
    """
    start = time.perf_counter()
    request_id = str(uuid.uuid4())
    target = url or settings.DEFAULT_FEED_URL

    feed = await fetch_feed(target, options, client=client)

    latency_ms = int((time.perf_counter() - start) * 1000)
    return FeedOut.from_feed(feed, url=target, request_id=request_id, api_latency_ms=latency_ms)


@router.get("/entries/{entry_id:path}", response_model=EntryOut, response_model_exclude_none=True)
async def get_entry(
    entry_id: str,
    url: Optional[str] = URL_QUERY,
    options: FeedOptions = Depends(get_feed_options),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    """Re-fetch the feed and return the entry with the given id."""
    feed = await fetch_feed(url or settings.DEFAULT_FEED_URL, options, client=client)
    entry = find_entry(feed, entry_id)
    if not entry:
        raise HTTPException(status_code=404, detail=f"Entry '{entry_id}' not found")
    return EntryOut.from_entry(entry)
