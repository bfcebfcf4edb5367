import asyncio
import logging
from datetime import datetime, timezone
from itertools import groupby

import feedparser
import httpx

from src.modules.fetcher.schemas import FeedSource, FetchResult, RawEntry

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 30.0
GROUP_DELAY = 0.5

_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/131.0.0.0 Safari/537.36"
    ),
    "Accept": "application/rss+xml,application/atom+xml,application/xml;q=0.9,*/*;q=0.8",
}


class FetcherService:
    """Fetches RSS/Atom feeds concurrently, isolating failures per URL."""

    def __init__(
        self,
        timeout: float = REQUEST_TIMEOUT,
        group_delay: float = GROUP_DELAY,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._group_delay = group_delay
        self._transport = transport

    # ── Parsing layer ───────────────────────────────────────────

    @staticmethod
    def _to_raw_entry(entry, category: str, fetched_at: datetime) -> RawEntry:
        content = None
        if entry.get("content"):
            content = entry["content"][0].get("value")

        description = entry.get("summary") or entry.get("description")
        snippet = None
        detail = entry.get("summary_detail") or {}
        if description and detail.get("type") == "text/plain":
            snippet = description

        return RawEntry(
            title=entry.get("title"),
            link=entry.get("link"),
            content_snippet=snippet,
            content=content,
            description=description,
            published=entry.get("published") or entry.get("updated"),
            category=category,
            fetched_at=fetched_at,
        )

    @classmethod
    def parse_feed(cls, body: bytes, category: str, fetched_at: datetime) -> list[RawEntry]:
        feed = feedparser.parse(body)
        if feed.bozo and not feed.entries:
            raise ValueError(f"malformed feed: {feed.get('bozo_exception')}")
        return [cls._to_raw_entry(entry, category, fetched_at) for entry in feed.entries]

    # ── HTTP layer ──────────────────────────────────────────────

    async def fetch(self, client: httpx.AsyncClient, source: FeedSource) -> list[RawEntry]:
        logger.info("Fetching %s", source.url)
        try:
            response = await client.get(
                source.url,
                headers=_HEADERS,
                timeout=self._timeout,
                follow_redirects=True,
            )
            response.raise_for_status()
            entries = self.parse_feed(
                response.content, source.category, datetime.now(timezone.utc)
            )
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Failed %s: %s", source.url, exc)
            return []
        except Exception:
            logger.exception("Failed %s", source.url)
            return []
        logger.info("Fetched %s: %d entries", source.url, len(entries))
        return entries

    # ── Orchestration ───────────────────────────────────────────

    async def fetch_all(self, sources: list[FeedSource]) -> FetchResult:
        tasks: list[asyncio.Task[list[RawEntry]]] = []

        async with httpx.AsyncClient(transport=self._transport) as client:
            groups = [list(group) for _, group in groupby(sources, key=lambda s: s.category)]
            for index, group in enumerate(groups):
                if group[0].category:
                    logger.info("Category %s: %d feeds", group[0].category, len(group))
                tasks.extend(asyncio.create_task(self.fetch(client, s)) for s in group)
                # requests already issued keep running during the pause
                if index < len(groups) - 1:
                    await asyncio.sleep(self._group_delay)

            results = await asyncio.gather(*tasks)

        entries: list[RawEntry] = []
        succeeded = 0
        for result in results:
            if result:
                entries.extend(result)
                succeeded += 1

        failed = len(results) - succeeded
        logger.info(
            "Fetching complete: %d sources ok, %d failed, %d entries",
            succeeded, failed, len(entries),
        )
        return FetchResult(entries=entries, succeeded=succeeded, failed=failed)
