from typing import List, Optional, Union

from pydantic import BaseModel

from feedcore.core.formatting import format_absolute_date, format_relative_date, strip_markup
from feedcore.schemas.feed import Feed, FeedEntry


class EntryOut(BaseModel):
    """Canonical entry plus the display labels the list and article screens show."""

    id: str
    title: str
    description: str
    link: str
    published_at: str
    author: Optional[str] = None
    categories: Optional[Union[str, List[str]]] = None
    summary: str
    published_display: str
    published_relative: str

    @classmethod
    def from_entry(cls, entry: FeedEntry) -> "EntryOut":
        return cls(
            **entry.model_dump(),
            summary=strip_markup(entry.description),
            published_display=format_absolute_date(entry.published_at),
            published_relative=format_relative_date(entry.published_at),
        )


class FeedOut(BaseModel):
    request_id: str
    api_latency_ms: int
    url: str
    title: str
    description: str
    link: str
    last_build_date: str
    format: str
    entries: list[EntryOut]

    @classmethod
    def from_feed(cls, feed: Feed, *, url: str, request_id: str, api_latency_ms: int) -> "FeedOut":
        return cls(
            request_id=request_id,
            api_latency_ms=api_latency_ms,
            url=url,
            title=feed.title,
            description=feed.description,
            link=feed.link,
            last_build_date=feed.last_build_date,
            format=feed.format,
            entries=[EntryOut.from_entry(entry) for entry in feed.entries],
        )


class HealthResponse(BaseModel):
    status: str
    env: str
    timestamp: str


class ErrorResponse(BaseModel):
    error: str
    detail: str
    status_code: int | None = None
