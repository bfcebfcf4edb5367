from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_serializer
from pydantic.alias_generators import to_camel

from src.modules.normalizer.schemas import iso_timestamp
from src.modules.summarizer.schemas import SummarizedArticle


class Snapshot(BaseModel):
    """Everything the front-end reads from ``news.json``."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    last_updated: datetime
    update_time: str
    total_articles: int
    categories: list[str]
    articles: list[SummarizedArticle]

    @field_serializer("last_updated")
    def _serialize_last_updated(self, value: datetime) -> str:
        return iso_timestamp(value)
