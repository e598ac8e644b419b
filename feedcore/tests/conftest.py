"""Shared feed documents and HTTP stubs."""

from typing import Callable, Dict, Tuple, Union

import httpx
import pytest

RSS_XML = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:dc="http://purl.org/dc/elements/1.1/">
  <channel>
    <title>Expo Changelog</title>
    <link>https://expo.dev/changelog</link>
    <description>Latest Expo news</description>
    <lastBuildDate>Mon, 06 Jan 2025 10:00:00 GMT</lastBuildDate>
    <item>
      <title>SDK 52</title>
      <link>https://expo.dev/changelog/sdk-52</link>
      <guid isPermaLink="false">sdk-52</guid>
      <pubDate>Mon, 06 Jan 2025 10:00:00 GMT</pubDate>
      <description><![CDATA[<p>Hello <b>World</b></p>]]></description>
      <dc:creator>Expo Team</dc:creator>
      <category>release</category>
      <category>sdk</category>
    </item>
    <item>
      <title>0042</title>
      <guid>12345</guid>
      <link>https://expo.dev/changelog/second</link>
      <author>jane@example.com (Jane)</author>
      <category>news</category>
    </item>
    <item>
      <description>No identifiers at all</description>
    </item>
  </channel>
</rss>
"""

SINGLE_ITEM_RSS = """<rss version="2.0">
  <channel>
    <title>Solo</title>
    <item>
      <title>Only one</title>
      <guid>only-1</guid>
    </item>
  </channel>
</rss>
"""

ATOM_XML = """<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title type="text">Example Atom</title>
  <subtitle>Atom subtitle</subtitle>
  <link rel="self" href="https://example.org/feed.xml"/>
  <link rel="alternate" href="https://example.org/"/>
  <updated>2024-01-05T12:00:00Z</updated>
  <entry>
    <id>urn:uuid:1</id>
    <title>First</title>
    <link href="https://example.org/1"/>
    <published>2024-01-05T10:00:00Z</published>
    <updated>2024-01-05T11:00:00Z</updated>
    <summary type="html">&lt;p&gt;Summary&lt;/p&gt;</summary>
    <author><name>Alice</name><email>alice@example.org</email></author>
    <category term="python"/>
  </entry>
  <entry>
    <id>urn:uuid:2</id>
    <title type="html">Second</title>
    <updated>2024-01-04T09:00:00Z</updated>
    <content type="html">Body</content>
  </entry>
</feed>
"""

MALFORMED_XML = "<rss><channel><title>Broken</channel></rss>"

HTML_PAGE = "<html><head><title>Not a feed</title></head><body/></html>"

LATIN1_RSS = (
    '<?xml version="1.0" encoding="ISO-8859-1"?>'
    "<rss version=\"2.0\"><channel><title>caf\xe9</title>"
    "<item><title>cr\xe8me br\xfbl\xe9e</title><guid>c-1</guid></item>"
    "</channel></rss>"
).encode("latin-1")

BAD_DATE_RSS = """<rss version="2.0">
  <channel>
    <title>Odd dates</title>
    <item><guid>bad-offset</guid><pubDate>Mon, 06 Jan 2025 10:00:00 +9900</pubDate></item>
    <item><guid>garbage</guid><pubDate>sometime soon</pubDate></item>
    <item><guid>fine</guid><pubDate>Mon, 06 Jan 2025 10:00:00 GMT</pubDate></item>
  </channel>
</rss>
"""

Routes = Dict[str, Tuple[int, Union[str, bytes]]]


def make_handler(routes: Routes) -> Callable[[httpx.Request], httpx.Response]:
    """Serve fixed (status, body) pairs by URL; unknown URLs fail to connect."""

    def handler(request: httpx.Request) -> httpx.Response:
        key = str(request.url)
        if key not in routes:
            raise httpx.ConnectError("connection refused", request=request)
        status, body = routes[key]
        headers = {"Content-Type": "application/rss+xml"}
        if isinstance(body, bytes):
            return httpx.Response(status, content=body, headers=headers)
        return httpx.Response(status, text=body, headers=headers)

    return handler


@pytest.fixture
def feed_routes() -> Routes:
    return {
        "https://feeds.test/rss": (200, RSS_XML),
        "https://feeds.test/atom": (200, ATOM_XML),
        "https://feeds.test/single": (200, SINGLE_ITEM_RSS),
        "https://feeds.test/broken": (200, MALFORMED_XML),
        "https://feeds.test/html": (200, HTML_PAGE),
        "https://feeds.test/latin1": (200, LATIN1_RSS),
        "https://feeds.test/bad-dates": (200, BAD_DATE_RSS),
        "https://feeds.test/missing": (404, "not found"),
        "https://feeds.test/down": (503, "unavailable"),
    }


@pytest.fixture
def mock_client(feed_routes):
    """AsyncClient whose transport serves ``feed_routes``."""
    return httpx.AsyncClient(transport=httpx.MockTransport(make_handler(feed_routes)))
