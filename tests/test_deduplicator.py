"""Tests for title-based deduplication."""

from src.modules.deduplicator.service import deduplicate


class TestDeduplicate:
    def test_keeps_first_occurrence(self, make_article) -> None:
        first = make_article("EV Battery News", link="https://source-a.test/1")
        second = make_article("EV Battery News", link="https://source-b.test/1")
        result = deduplicate([first, make_article("Other"), second])
        assert [a.link for a in result if a.title == "EV Battery News"] == ["https://source-a.test/1"]
        assert len(result) == 2

    def test_title_match_is_case_sensitive(self, make_article) -> None:
        result = deduplicate([make_article("Steel"), make_article("steel")])
        assert len(result) == 2

    def test_empty_titles_collapse(self, make_article) -> None:
        result = deduplicate([make_article("", link="https://a.test"), make_article("", link="https://b.test")])
        assert [a.link for a in result] == ["https://a.test"]

    def test_is_idempotent(self, make_article) -> None:
        articles = [make_article(t) for t in ["a", "b", "a", "c", "b"]]
        once = deduplicate(articles)
        assert deduplicate(once) == once
        assert len({a.title for a in once}) == len(once)
        assert [a.title for a in once] == ["a", "b", "c"]
