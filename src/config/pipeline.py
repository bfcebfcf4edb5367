from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from src.config.settings import Settings
from src.config.sources import CATEGORY_KEYWORDS, GROUPED_FEEDS, KEYWORD_FEEDS
from src.modules.categorizer.schemas import CategoryRule
from src.modules.fetcher.schemas import FeedSource


class Edition(str, Enum):
    RECENCY = "recency"  # categories come from the feed's group, newest first
    KEYWORD = "keyword"  # categories come from keyword matching, blended ranking


class PipelineConfig(BaseModel):
    """Everything one pipeline run needs, resolved once at start-up."""

    model_config = ConfigDict(frozen=True)

    edition: Edition
    sources: tuple[FeedSource, ...]
    categories: tuple[str, ...]
    category_rules: dict[str, CategoryRule] = {}
    provider_name: str
    api_key: str | None = None
    output_path: Path
    feed_timeout: float
    pipeline_timeout: float
    display_timezone: str
    max_articles: int = 50
    min_per_category: int = 3


def _api_key_for(settings: Settings, provider_name: str) -> str | None:
    return {
        "doubao": settings.doubao_api_key,
        "deepseek": settings.deepseek_api_key,
        "qwen": settings.qwen_api_key,
    }.get(provider_name)


def build_pipeline_config(
    settings: Settings,
    edition: Edition | str | None = None,
    output_path: Path | str | None = None,
) -> PipelineConfig:
    edition = Edition(edition or settings.edition)
    provider_name = settings.ai_provider.strip().lower()

    if edition is Edition.RECENCY:
        sources = tuple(
            FeedSource(url=url, category=category)
            for category, urls in GROUPED_FEEDS.items()
            for url in urls
        )
        categories = tuple(GROUPED_FEEDS)
        rules: dict[str, CategoryRule] = {}
    else:
        sources = tuple(FeedSource(url=url) for url in KEYWORD_FEEDS)
        categories = tuple(CATEGORY_KEYWORDS)
        rules = {
            name: CategoryRule(include=tuple(words["include"]), exclude=tuple(words["exclude"]))
            for name, words in CATEGORY_KEYWORDS.items()
        }

    return PipelineConfig(
        edition=edition,
        sources=sources,
        categories=categories,
        category_rules=rules,
        provider_name=provider_name,
        api_key=_api_key_for(settings, provider_name),
        output_path=Path(output_path or settings.output_path),
        feed_timeout=settings.feed_timeout,
        pipeline_timeout=settings.pipeline_timeout,
        display_timezone=settings.display_timezone,
    )
