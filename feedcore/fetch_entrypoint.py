"""Fetch entrypoint - print a normalized feed to stdout.

Usage:
    python -m feedcore.fetch_entrypoint                 # DEFAULT_FEED_URL
    python -m feedcore.fetch_entrypoint <feed-url>      # any RSS 2.0 / Atom URL
"""

import asyncio
import sys

from feedcore.core.config import settings
from feedcore.core.errors import FeedError
from feedcore.core.formatting import format_relative_date, strip_markup
from feedcore.core.logging import get_logger
from feedcore.schemas.feed import Feed
from feedcore.services.feed_service import fetch_feed

logger = get_logger("fetch_entrypoint")

SUMMARY_WIDTH = 120


def render_feed(feed: Feed) -> str:
    lines = [feed.title]
    if feed.description:
        lines.append(strip_markup(feed.description))
    lines.append("")
    for entry in feed.entries:
        byline = format_relative_date(entry.published_at)
        if entry.author:
            byline = f"{byline} - {entry.author}"
        lines.append(f"{entry.title}  [{byline}]")
        summary = strip_markup(entry.description)
        if summary:
            lines.append(f"    {summary[:SUMMARY_WIDTH]}")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    url = argv[0] if argv else settings.DEFAULT_FEED_URL

    try:
        feed = asyncio.run(fetch_feed(url, settings.feed_options()))
    except FeedError as exc:
        logger.error(f"Failed to load feed {url}: {exc.message}")
        return 1

    print(render_feed(feed))
    return 0


if __name__ == "__main__":
    sys.exit(main())
