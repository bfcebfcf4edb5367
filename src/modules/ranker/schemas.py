from pydantic import Field

from src.modules.normalizer.schemas import Article


class RankedArticle(Article):
    """Article in its final ranking position.

    Scores stay ``None`` when ranking was purely by recency.
    """

    relevance_score: int | None = Field(default=None, ge=0, le=100)
    final_score: float | None = None
