"""Map the generic XML tree of an RSS 2.0 or Atom document onto Feed/FeedEntry.

Every canonical field is resolved from an ordered tuple of candidates; the
first candidate yielding a non-empty string wins, otherwise the field's
default applies. Only an unrecognizable root raises.
"""

from __future__ import annotations

import hashlib
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from feedcore.core.config import FeedOptions
from feedcore.core.errors import InvalidFeedFormatError
from feedcore.core.logging import get_logger
from feedcore.ingestion.xml_tree import ATTR_PREFIX, TEXT_KEY
from feedcore.schemas.feed import Feed, FeedEntry, FeedFormat

log = get_logger("services.normalizer")

Candidate = Callable[[Mapping[str, Any]], Optional[str]]

HREF_KEY = ATTR_PREFIX + "href"
REL_KEY = ATTR_PREFIX + "rel"
TERM_KEY = ATTR_PREFIX + "term"

DEFAULT_FEED_TITLE = "RSS Feed"
DEFAULT_ENTRY_TITLE = "Untitled"

ENTRY_TAGS: Dict[str, str] = {"rss": "item", "atom": "entry"}


def now_iso() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


# -----------------------------------------------------------------------------
# Coercion
# -----------------------------------------------------------------------------
def to_text(value: Any) -> Optional[str]:
    """Text-or-scalar resolution with explicit string coercion.

    A mapping yields its "#text" value, a list its first element, a scalar
    itself. Empty strings and mappings without text resolve to None.
    """
    if value is None:
        return None
    if isinstance(value, Mapping):
        return to_text(value.get(TEXT_KEY))
    if isinstance(value, list):
        return to_text(value[0]) if value else None
    if isinstance(value, bool):
        text = "true" if value else "false"
    else:
        text = str(value)
    return text or None


def ensure_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return list(value)
    return [value]


def _as_mapping(value: Any) -> Mapping[str, Any]:
    # <item/> and <channel/> parse to "", which still counts as an element
    return value if isinstance(value, Mapping) else {}


# -----------------------------------------------------------------------------
# Candidates
# -----------------------------------------------------------------------------
def text(field: str) -> Candidate:
    return lambda node: to_text(node.get(field))


def child_text(field: str, child: str) -> Candidate:
    def resolve(node: Mapping[str, Any]) -> Optional[str]:
        value = node.get(field)
        if isinstance(value, list):
            value = value[0] if value else None
        if isinstance(value, Mapping):
            return to_text(value.get(child))
        return None

    return resolve


def href(field: str) -> Candidate:
    """href attribute of a link element; among several, rel="alternate" (or no rel) wins."""

    def resolve(node: Mapping[str, Any]) -> Optional[str]:
        links = [link for link in ensure_list(node.get(field)) if isinstance(link, Mapping) and link.get(HREF_KEY)]
        if not links:
            return None
        for link in links:
            if link.get(REL_KEY, "alternate") == "alternate":
                return to_text(link[HREF_KEY])
        return to_text(links[0][HREF_KEY])

    return resolve


def first_match(node: Mapping[str, Any], candidates: Sequence[Candidate]) -> Optional[str]:
    for candidate in candidates:
        value = candidate(node)
        if value is not None:
            return value
    return None


CHANNEL_TITLE: Tuple[Candidate, ...] = (text("title"),)
CHANNEL_DESCRIPTION: Tuple[Candidate, ...] = (text("description"), text("subtitle"))
CHANNEL_LINK: Tuple[Candidate, ...] = (href("link"), text("link"))
CHANNEL_LAST_BUILD: Tuple[Candidate, ...] = (text("lastBuildDate"), text("updated"))

ENTRY_ID: Tuple[Candidate, ...] = (text("guid"), text("id"), href("link"), text("link"))
ENTRY_TITLE: Tuple[Candidate, ...] = (text("title"),)
ENTRY_DESCRIPTION: Tuple[Candidate, ...] = (text("description"), text("summary"), text("content"))
ENTRY_LINK: Tuple[Candidate, ...] = (href("link"), text("link"), text("guid"))
ENTRY_PUBLISHED: Tuple[Candidate, ...] = (text("pubDate"), text("published"), text("updated"))
ENTRY_AUTHOR: Tuple[Candidate, ...] = (child_text("author", "name"), text("author"), text("dc:creator"))


# -----------------------------------------------------------------------------
# Entries
# -----------------------------------------------------------------------------
def _category_text(value: Any) -> Optional[str]:
    resolved = to_text(value)
    if resolved is None and isinstance(value, Mapping):
        # Atom: <category term="python"/>
        resolved = to_text(value.get(TERM_KEY))
    return resolved


def resolve_categories(node: Mapping[str, Any]) -> Optional[Union[str, List[str]]]:
    raw = node.get("category")
    if isinstance(raw, list):
        return [_category_text(value) or "" for value in raw]
    return _category_text(raw)


def fallback_id(options: FeedOptions, title: Optional[str], link: Optional[str], published: Optional[str]) -> str:
    if options.id_fallback == "hash":
        seed = "\x1f".join(part or "" for part in (title, link, published))
        return hashlib.sha1(seed.encode("utf-8")).hexdigest()
    return uuid.uuid4().hex


def normalize_entry(raw: Any, options: FeedOptions) -> FeedEntry:
    node = _as_mapping(raw)

    title = first_match(node, ENTRY_TITLE)
    link = first_match(node, ENTRY_LINK)
    published = first_match(node, ENTRY_PUBLISHED)
    entry_id = first_match(node, ENTRY_ID) or fallback_id(options, title, link, published)

    return FeedEntry(
        id=entry_id,
        title=title or DEFAULT_ENTRY_TITLE,
        description=first_match(node, ENTRY_DESCRIPTION) or "",
        link=link or "",
        published_at=published or now_iso(),
        author=first_match(node, ENTRY_AUTHOR),
        categories=resolve_categories(node),
    )


# -----------------------------------------------------------------------------
# Feed
# -----------------------------------------------------------------------------
def detect_format(tree: Mapping[str, Any]) -> Tuple[FeedFormat, Mapping[str, Any]]:
    """Return the format tag and the channel (RSS) or feed (Atom) node."""
    rss = tree.get("rss")
    if isinstance(rss, Mapping) and "channel" in rss:
        channel = rss["channel"]
        if isinstance(channel, list):
            channel = channel[0]
        return "rss", _as_mapping(channel)
    if "feed" in tree:
        return "atom", _as_mapping(tree["feed"])
    raise InvalidFeedFormatError()


def normalize_feed(tree: Mapping[str, Any], options: Optional[FeedOptions] = None) -> Feed:
    options = options or FeedOptions()
    feed_format, channel = detect_format(tree)

    raw_entries = ensure_list(channel.get(ENTRY_TAGS[feed_format]))
    entries = [normalize_entry(raw, options) for raw in raw_entries]
    log.debug(f"Normalized {len(entries)} {feed_format} entries")

    return Feed(
        title=first_match(channel, CHANNEL_TITLE) or DEFAULT_FEED_TITLE,
        description=first_match(channel, CHANNEL_DESCRIPTION) or "",
        link=first_match(channel, CHANNEL_LINK) or "",
        last_build_date=first_match(channel, CHANNEL_LAST_BUILD) or now_iso(),
        format=feed_format,
        entries=entries,
    )
