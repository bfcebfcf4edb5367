from pydantic import BaseModel, ConfigDict, Field

from src.modules.normalizer.schemas import Article


class CategoryRule(BaseModel):
    """Keyword lists that decide membership of one category."""

    model_config = ConfigDict(frozen=True)

    include: tuple[str, ...] = ()
    exclude: tuple[str, ...] = ()


class ScoredArticle(Article):
    """Article assigned to its best-matching category."""

    relevance_score: int = Field(ge=0, le=100)
