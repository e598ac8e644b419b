"""Canonical feed model produced for both RSS 2.0 and Atom sources."""

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field

FeedFormat = Literal["rss", "atom"]


class FeedEntry(BaseModel):
    """One item/entry. Required fields are always populated, possibly with defaults."""

    id: str
    title: str
    description: str
    link: str
    published_at: str
    author: Optional[str] = None
    categories: Optional[Union[str, List[str]]] = None


class Feed(BaseModel):
    title: str
    description: str
    link: str
    last_build_date: str
    format: FeedFormat
    entries: List[FeedEntry] = Field(default_factory=list)
