"""Tests for snapshot building and writing."""

import json
from datetime import datetime, timezone

from src.modules.snapshot.service import SnapshotService, format_update_time
from src.modules.summarizer.schemas import SummarizedArticle

NOW = datetime(2024, 3, 7, 0, 5, 9, 123000, tzinfo=timezone.utc)
PUBLISHED = datetime(2024, 1, 1, 12, tzinfo=timezone.utc)


def _article(**scores) -> SummarizedArticle:
    return SummarizedArticle(
        title="铝合金突破",
        link="https://example.com/a",
        date=PUBLISHED,
        category="材料创新",
        description="lightweight alloy",
        summary="轻量化合金...",
        **scores,
    )


class TestFormatUpdateTime:
    def test_shanghai_locale_style(self) -> None:
        assert format_update_time(NOW) == "2024/3/7 08:05:09"

    def test_other_timezone(self) -> None:
        assert format_update_time(NOW, "UTC") == "2024/3/7 00:05:09"


class TestSnapshotService:
    def test_build_counts_articles(self) -> None:
        snapshot = SnapshotService().build([_article(), _article()], ["材料创新"], NOW)
        assert snapshot.total_articles == 2
        assert snapshot.categories == ["材料创新"]

    def test_writes_json_contract(self, tmp_path) -> None:
        service = SnapshotService()
        path = tmp_path / "data" / "news.json"
        snapshot = service.build(
            [_article(relevance_score=60, final_score=55.5)], ["材料创新", "汽车防腐"], NOW
        )

        service.write(snapshot, path)

        raw = path.read_text(encoding="utf-8")
        assert "铝合金突破" in raw
        data = json.loads(raw)
        assert data["lastUpdated"] == "2024-03-07T00:05:09.123Z"
        assert data["updateTime"] == "2024/3/7 08:05:09"
        assert data["totalArticles"] == 1
        assert data["categories"] == ["材料创新", "汽车防腐"]
        assert data["articles"][0] == {
            "title": "铝合金突破",
            "link": "https://example.com/a",
            "date": "2024-01-01T12:00:00.000Z",
            "category": "材料创新",
            "description": "lightweight alloy",
            "summary": "轻量化合金...",
            "relevanceScore": 60,
            "finalScore": 55.5,
        }

    def test_recency_articles_omit_scores(self, tmp_path) -> None:
        service = SnapshotService()
        path = tmp_path / "news.json"
        service.write(service.build([_article()], [], NOW), path)
        article = json.loads(path.read_text(encoding="utf-8"))["articles"][0]
        assert set(article) == {"title", "link", "date", "category", "description", "summary"}

    def test_replaces_previous_snapshot(self, tmp_path) -> None:
        service = SnapshotService()
        path = tmp_path / "news.json"
        path.write_text('{"old": true}', encoding="utf-8")

        service.write(service.build([], ["材料创新"], NOW), path)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert "old" not in data
        assert data["articles"] == []
        assert [p.name for p in tmp_path.iterdir()] == ["news.json"]
