# Services package
from feedcore.services.feed_service import fetch_feed, find_entry
from feedcore.services.normalizer import normalize_feed

__all__ = [
    "fetch_feed",
    "find_entry",
    "normalize_feed",
]
