"""Tests for the feed fetcher."""

import asyncio
from datetime import datetime, timezone

import httpx

from src.modules.fetcher.schemas import FeedSource
from src.modules.fetcher.service import FetcherService

FETCHED_AT = datetime(2024, 1, 2, tzinfo=timezone.utc)

RSS_BODY = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:content="http://purl.org/rss/1.0/modules/content/">
<channel>
  <title>Materials</title>
  <link>https://example.com</link>
  <description>Test feed</description>
  <item>
    <title>Aluminum Alloy Breakthrough</title>
    <link>https://example.com/a</link>
    <description>researchers developed lightweight aluminum alloy</description>
    <content:encoded><![CDATA[<p>Full body</p>]]></content:encoded>
    <pubDate>Mon, 01 Jan 2024 12:00:00 GMT</pubDate>
  </item>
  <item>
    <title>Second</title>
    <link>https://example.com/b</link>
    <description>Plain text</description>
  </item>
</channel>
</rss>
"""


def _fetch(handler, source: FeedSource):
    async def go():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await FetcherService().fetch(client, source)

    return asyncio.run(go())


class TestParseFeed:
    def test_maps_entries(self) -> None:
        entries = FetcherService.parse_feed(RSS_BODY, "金属材料", FETCHED_AT)
        assert len(entries) == 2
        first = entries[0]
        assert first.title == "Aluminum Alloy Breakthrough"
        assert first.link == "https://example.com/a"
        assert "aluminum alloy" in first.description
        assert "Full body" in first.content
        assert first.published == "Mon, 01 Jan 2024 12:00:00 GMT"
        assert first.category == "金属材料"
        assert first.fetched_at == FETCHED_AT

    def test_missing_date_is_none(self) -> None:
        entries = FetcherService.parse_feed(RSS_BODY, "", FETCHED_AT)
        assert entries[1].published is None
        assert entries[1].content is None


class TestFetch:
    def test_returns_entries_on_success(self) -> None:
        seen_headers = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen_headers.update(request.headers)
            return httpx.Response(200, content=RSS_BODY)

        entries = _fetch(handler, FeedSource(url="https://feeds.test/rss"))
        assert [e.title for e in entries] == ["Aluminum Alloy Breakthrough", "Second"]
        assert seen_headers["user-agent"].startswith("Mozilla/5.0")

    def test_http_error_returns_empty(self) -> None:
        entries = _fetch(lambda request: httpx.Response(500), FeedSource(url="https://feeds.test/rss"))
        assert entries == []

    def test_network_error_returns_empty(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        assert _fetch(handler, FeedSource(url="https://feeds.test/rss")) == []

    def test_malformed_body_returns_empty(self) -> None:
        entries = _fetch(
            lambda request: httpx.Response(200, content=b"<<< not a feed"),
            FeedSource(url="https://feeds.test/rss"),
        )
        assert entries == []


class TestFetchAll:
    def test_counts_successes_and_failures(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.host == "down.test":
                return httpx.Response(404)
            return httpx.Response(200, content=RSS_BODY)

        sources = [
            FeedSource(url="https://one.test/rss", category="A"),
            FeedSource(url="https://down.test/rss", category="A"),
            FeedSource(url="https://two.test/rss", category="B"),
        ]
        service = FetcherService(group_delay=0, transport=httpx.MockTransport(handler))
        result = asyncio.run(service.fetch_all(sources))

        assert result.succeeded == 2
        assert result.failed == 1
        assert len(result.entries) == 4
        assert [e.category for e in result.entries] == ["A", "A", "B", "B"]

    def test_all_failures_yield_no_entries(self) -> None:
        service = FetcherService(
            group_delay=0, transport=httpx.MockTransport(lambda request: httpx.Response(503))
        )
        result = asyncio.run(service.fetch_all([FeedSource(url="https://x.test/rss")]))
        assert result.entries == []
        assert result.succeeded == 0
        assert result.failed == 1
