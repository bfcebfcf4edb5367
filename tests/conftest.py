from datetime import datetime, timezone

import pytest

from src.modules.normalizer.schemas import Article
from src.modules.ranker.schemas import RankedArticle

BASE_DATE = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_article():
    def _make(title: str = "Title", link: str | None = None, **fields) -> Article:
        fields.setdefault("date", BASE_DATE)
        return Article(title=title, link=link or f"https://example.com/{title}", **fields)

    return _make


@pytest.fixture
def make_ranked():
    def _make(title: str, category: str, relevance: int, final: float, **fields) -> RankedArticle:
        fields.setdefault("date", BASE_DATE)
        fields.setdefault("link", f"https://example.com/{title}")
        return RankedArticle(
            title=title,
            category=category,
            relevance_score=relevance,
            final_score=final,
            **fields,
        )

    return _make
