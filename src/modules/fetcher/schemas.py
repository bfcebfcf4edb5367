from datetime import datetime

from pydantic import BaseModel, ConfigDict


class FeedSource(BaseModel):
    """A configured feed URL and the category label it contributes under."""

    model_config = ConfigDict(frozen=True)

    url: str
    category: str = ""


class RawEntry(BaseModel):
    """One feed item as delivered by the parser, before normalization."""

    model_config = ConfigDict(frozen=True)

    title: str | None = None
    link: str | None = None
    content_snippet: str | None = None
    content: str | None = None
    description: str | None = None
    published: str | None = None  # raw string; parsed by the normalizer
    category: str = ""
    fetched_at: datetime


class FetchResult(BaseModel):
    """Aggregated result of fetching every configured source."""

    entries: list[RawEntry]
    succeeded: int
    failed: int
