"""Feed-level failures. Any of these aborts a fetch; none is retried."""


class FeedError(Exception):
    """Base class for errors surfaced by fetch_feed."""

    kind = "feed_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TransportError(FeedError):
    """The request could not complete (DNS, connection, timeout)."""

    kind = "transport_error"

    def __init__(self, url: str, reason: str):
        super().__init__(f"Could not reach {url}: {reason}")
        self.url = url


class HttpStatusError(FeedError):
    """The server answered with a non-2xx status."""

    kind = "http_status_error"

    def __init__(self, url: str, status_code: int):
        super().__init__(f"HTTP error! status: {status_code}")
        self.url = url
        self.status_code = status_code


class ParseError(FeedError):
    kind = "parse_error"


class InvalidFeedFormatError(FeedError):
    kind = "invalid_feed_format"

    def __init__(self, message: str = "Invalid RSS feed format"):
        super().__init__(message)
