"""Display helpers for entry fields: date labels and tag stripping.

All functions are pure and never raise on bad input; a date that cannot be
parsed is echoed back unchanged.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from email.utils import parsedate_to_datetime
from typing import Optional
from zoneinfo import ZoneInfo

from dateutil import parser as date_parser

from feedcore.core.config import settings

_TAG_RE = re.compile(r"<[^>]*>")

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

_MINUTE = timedelta(minutes=1)
_HOUR = timedelta(hours=1)
_DAY = timedelta(days=1)

# Two fill-in dates differing in year: a year the text does not contain shows up as a mismatch
_DEFAULTS = (datetime(2000, 1, 1), datetime(2004, 1, 1))


def parse_date(value: str) -> Optional[datetime]:
    """Parse an RSS (RFC 822) or Atom (ISO 8601) date; naive values are UTC."""
    text = (value or "").strip()
    if not text:
        return None

    try:
        parsed = parsedate_to_datetime(text)
    except (TypeError, ValueError, IndexError):
        parsed = None

    if parsed is None:
        parsed = _parse_with_year(text)
        if parsed is None:
            return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    try:
        # dateutil accepts offsets such as +9900 that datetime cannot apply
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return None


def _parse_with_year(text: str) -> Optional[datetime]:
    """dateutil parse that rejects strings without a year ("5", "Monday")."""
    try:
        first = date_parser.parse(text, default=_DEFAULTS[0])
        second = date_parser.parse(text, default=_DEFAULTS[1])
    except (ValueError, OverflowError):
        return None
    if first.year != second.year:
        return None
    return first


def _display_tz(tz: Optional[tzinfo]) -> tzinfo:
    if tz is not None:
        return tz
    if settings.DISPLAY_TIMEZONE.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(settings.DISPLAY_TIMEZONE)


def format_absolute_date(value: str, tz: Optional[tzinfo] = None) -> str:
    """Render as "Jan 5, 2024" in the display timezone."""
    parsed = parse_date(value)
    if parsed is None:
        return value
    try:
        local = parsed.astimezone(_display_tz(tz))
    except (OverflowError, ValueError):
        return value
    return f"{_MONTHS[local.month - 1]} {local.day}, {local.year}"


def format_relative_date(
    value: str,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> str:
    """Render elapsed time as "12m ago", "3h ago", "Yesterday" or "4d ago".

    Buckets use floor division of the elapsed time. A week or more, or an
    unparsable value, falls back to format_absolute_date.
    """
    parsed = parse_date(value)
    if parsed is None:
        return format_absolute_date(value, tz)

    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    elapsed = max(now - parsed, timedelta(0))
    days = elapsed // _DAY

    if days == 0:
        hours = elapsed // _HOUR
        if hours == 0:
            return f"{elapsed // _MINUTE}m ago"
        return f"{hours}h ago"
    if days == 1:
        return "Yesterday"
    if days < 7:
        return f"{days}d ago"
    return format_absolute_date(value, tz)


def strip_markup(text: str) -> str:
    """Drop every <...> tag and trim. Entities are left as-is."""
    return _TAG_RE.sub("", text or "").strip()
