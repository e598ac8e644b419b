"""API dependencies"""

from typing import AsyncGenerator

import httpx

from feedcore.core.config import FeedOptions, settings


def get_feed_options() -> FeedOptions:
    return settings.feed_options()


async def get_http_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    """One client per request; nothing is shared between fetches."""
    async with httpx.AsyncClient(follow_redirects=True) as client:
        yield client
