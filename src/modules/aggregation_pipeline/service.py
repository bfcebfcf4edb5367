import asyncio
import logging
from datetime import datetime, timezone

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from src.config.pipeline import Edition, PipelineConfig
from src.modules.aggregation_pipeline.composer import PipelineComposer, StepReport
from src.modules.categorizer.schemas import ScoredArticle
from src.modules.categorizer.service import CategorizerService
from src.modules.deduplicator.service import deduplicate
from src.modules.fetcher.schemas import FetchResult
from src.modules.fetcher.service import FetcherService
from src.modules.normalizer.schemas import Article
from src.modules.normalizer.service import normalizer_service
from src.modules.ranker.schemas import RankedArticle
from src.modules.ranker.service import (
    rank_blended,
    rank_by_recency,
    select_top,
    select_with_quota,
)
from src.modules.snapshot.schemas import Snapshot
from src.modules.snapshot.service import SnapshotService
from src.modules.summarizer.providers import build_provider
from src.modules.summarizer.schemas import SummarizedArticle
from src.modules.summarizer.service import SummarizerService

logger = logging.getLogger(__name__)


class PipelineError(Exception):
    """A run that must not replace the published snapshot."""


class AggregationPipelineService:
    def __init__(self, config: PipelineConfig) -> None:
        self._config = config
        self._fetcher = FetcherService(timeout=config.feed_timeout)
        self._categorizer = CategorizerService(config.category_rules)
        self._summarizer = SummarizerService(build_provider(config.provider_name, config.api_key))
        self._snapshots = SnapshotService(config.display_timezone)

        self._composer = PipelineComposer(label=f"{config.edition.value} edition")
        self._composer.add_step("fetch", self._fetch)
        self._composer.add_step("normalize", self._normalize)
        self._composer.add_step("deduplicate", self._deduplicate)
        if config.edition is Edition.KEYWORD:
            self._composer.add_step("categorize", self._categorize)
        self._composer.add_step("rank", self._rank)
        self._composer.add_step("select", self._select)
        self._composer.add_step("summarize", self._summarize)
        self._composer.add_step("write", self._write)

        self._scheduler = AsyncIOScheduler()
        self._reset()

    def _reset(self) -> None:
        self._fetch_result: FetchResult | None = None
        self._articles: list[Article] = []
        self._scored: list[ScoredArticle] = []
        self._ranked: list[RankedArticle] = []
        self._selected: list[RankedArticle] = []
        self._summarized: list[SummarizedArticle] = []
        self._snapshot: Snapshot | None = None

    # ── Steps ───────────────────────────────────────────────────

    async def _fetch(self) -> int:
        self._fetch_result = await self._fetcher.fetch_all(list(self._config.sources))
        if self._fetch_result.succeeded == 0:
            raise PipelineError("every feed failed, keeping the previous snapshot")
        return len(self._fetch_result.entries)

    async def _normalize(self) -> int:
        self._articles = normalizer_service.normalize_all(self._fetch_result.entries)
        return len(self._articles)

    async def _deduplicate(self) -> int:
        self._articles = deduplicate(self._articles)
        return len(self._articles)

    async def _categorize(self) -> int:
        self._scored = self._categorizer.categorize(self._articles)
        return len(self._scored)

    async def _rank(self) -> int:
        if self._config.edition is Edition.KEYWORD:
            self._ranked = rank_blended(self._scored)
        else:
            self._ranked = rank_by_recency(self._articles)
        return len(self._ranked)

    async def _select(self) -> int:
        if self._config.edition is Edition.KEYWORD:
            self._selected = select_with_quota(
                self._ranked,
                list(self._config.categories),
                limit=self._config.max_articles,
                min_per_category=self._config.min_per_category,
            )
        else:
            self._selected = select_top(self._ranked, limit=self._config.max_articles)
        return len(self._selected)

    async def _summarize(self) -> int:
        self._summarized = await self._summarizer.summarize_all(self._selected)
        return len(self._summarized)

    async def _write(self) -> int:
        snapshot = self._snapshots.build(
            self._summarized,
            list(self._config.categories),
            datetime.now(timezone.utc),
        )
        self._snapshots.write(snapshot, self._config.output_path)
        self._snapshot = snapshot
        return len(snapshot.articles)

    @property
    def step_reports(self) -> list[StepReport]:
        return list(self._composer.reports)

    # ── Entry points ────────────────────────────────────────────

    async def run_once(self) -> Snapshot:
        self._reset()
        logger.info(
            "Aggregation run (edition=%s, %d sources)",
            self._config.edition.value, len(self._config.sources),
        )
        try:
            await asyncio.wait_for(self._composer.run(), timeout=self._config.pipeline_timeout)
        except asyncio.TimeoutError as exc:
            raise PipelineError(
                f"run exceeded {self._config.pipeline_timeout:.0f}s, keeping the previous snapshot"
            ) from exc
        return self._snapshot

    async def _scheduled_run(self) -> None:
        try:
            await self.run_once()
        except Exception:
            logger.exception("Scheduled aggregation run failed")

    async def start(self, cron: str) -> None:
        await self._scheduled_run()
        self._scheduler.add_job(
            self._scheduled_run,
            CronTrigger.from_crontab(cron),
            id="aggregation_pipeline",
            replace_existing=True,
        )
        self._scheduler.start()
        logger.info("Scheduler started: pipeline runs on '%s'", cron)

    async def stop(self) -> None:
        self._scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")
