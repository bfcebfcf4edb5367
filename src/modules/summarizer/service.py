import asyncio
import logging
import re

import httpx

from src.modules.normalizer.schemas import Article
from src.modules.ranker.schemas import RankedArticle
from src.modules.summarizer.contracts import SummarizationError, SummarizationProvider
from src.modules.summarizer.schemas import SummarizedArticle

logger = logging.getLogger(__name__)

FALLBACK_LENGTH = 150
ELLIPSIS = "..."
BATCH_SIZE = 3
BATCH_DELAY = 1.0
REQUEST_TIMEOUT = 60.0

_CJK = re.compile(r"[一-龥]")


def contains_cjk(text: str) -> bool:
    return bool(text) and _CJK.search(text) is not None


def fallback_summary(text: str) -> str:
    return text[:FALLBACK_LENGTH] + ELLIPSIS


class SummarizerService:
    """Produces a short Chinese summary for every retained article."""

    def __init__(
        self,
        provider: SummarizationProvider | None,
        batch_size: int = BATCH_SIZE,
        batch_delay: float = BATCH_DELAY,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._provider = provider
        self._batch_size = batch_size
        self._batch_delay = batch_delay
        self._transport = transport

    async def summarize(self, client: httpx.AsyncClient | None, article: Article) -> str:
        text = article.description
        if contains_cjk(text) or not text:
            return fallback_summary(text)
        if self._provider is None or client is None:
            return fallback_summary(text)
        try:
            return await self._provider.summarize(client, text)
        except SummarizationError as exc:
            logger.warning("Summary fallback for '%s': %s", article.title[:40], exc)
            return fallback_summary(text)

    async def summarize_all(self, articles: list[RankedArticle]) -> list[SummarizedArticle]:
        if self._provider is None:
            logger.warning("No summarization API key configured, using descriptions")
            return [
                SummarizedArticle(**a.stage_fields(), summary=fallback_summary(a.description))
                for a in articles
            ]

        logger.info("Generating summaries with %s", self._provider.name)
        done = 0
        total = len(articles)

        async def summarize_one(client: httpx.AsyncClient, article: RankedArticle) -> SummarizedArticle:
            nonlocal done
            summary = await self.summarize(client, article)
            done += 1
            logger.info("[%d/%d] %s", done, total, article.title[:40])
            return SummarizedArticle(**article.stage_fields(), summary=summary)

        results: list[SummarizedArticle] = []
        async with httpx.AsyncClient(timeout=REQUEST_TIMEOUT, transport=self._transport) as client:
            for start in range(0, total, self._batch_size):
                batch = articles[start : start + self._batch_size]
                results.extend(await asyncio.gather(*(summarize_one(client, a) for a in batch)))
                if start + self._batch_size < total:
                    await asyncio.sleep(self._batch_delay)

        logger.info("Summaries complete: %d articles", len(results))
        return results
