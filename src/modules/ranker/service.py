import logging
from collections import Counter

from src.modules.categorizer.schemas import ScoredArticle
from src.modules.normalizer.schemas import Article
from src.modules.ranker.schemas import RankedArticle

logger = logging.getLogger(__name__)

MAX_ARTICLES = 50
MIN_PER_CATEGORY = 3
RELEVANCE_WEIGHT = 0.5
RECENCY_WEIGHT = 0.5
FLAT_TIME_SCORE = 50.0


def _timestamp_ms(article: Article) -> float:
    return article.date.timestamp() * 1000


# ── Ranking ─────────────────────────────────────────────────────


def rank_by_recency(articles: list[Article]) -> list[RankedArticle]:
    ordered = sorted(articles, key=lambda a: a.date, reverse=True)
    return [RankedArticle(**a.stage_fields()) for a in ordered]


def rank_blended(articles: list[ScoredArticle]) -> list[RankedArticle]:
    """Blend relevance with recency relative to the batch's own date range."""
    if not articles:
        return []

    stamps = [_timestamp_ms(a) for a in articles]
    newest, oldest = max(stamps), min(stamps)
    span = newest - oldest

    ranked: list[RankedArticle] = []
    for article, stamp in zip(articles, stamps):
        time_score = (stamp - oldest) / span * 100 if span > 0 else FLAT_TIME_SCORE
        final_score = article.relevance_score * RELEVANCE_WEIGHT + time_score * RECENCY_WEIGHT
        ranked.append(RankedArticle(**article.stage_fields(), final_score=final_score))

    ranked.sort(key=lambda a: a.final_score, reverse=True)
    return ranked


# ── Selection ───────────────────────────────────────────────────


def select_top(ranked: list[RankedArticle], limit: int = MAX_ARTICLES) -> list[RankedArticle]:
    selected = ranked[:limit]
    logger.info("Kept newest %d of %d articles", len(selected), len(ranked))
    return selected


def select_with_quota(
    ranked: list[RankedArticle],
    categories: list[str],
    limit: int = MAX_ARTICLES,
    min_per_category: int = MIN_PER_CATEGORY,
) -> list[RankedArticle]:
    """Guarantee each category a few slots, then fill up by final score.

    ``ranked`` must already be in final-score order. Articles are tracked by
    link so none is picked twice across the two phases.
    """
    selected: list[RankedArticle] = []
    used_links: set[str] = set()

    # Phase 1: per-category minimum, most relevant first
    for category in categories:
        candidates = sorted(
            (a for a in ranked if a.category == category and a.link not in used_links),
            key=lambda a: a.relevance_score or 0,
            reverse=True,
        )
        quota = min(min_per_category, len(candidates), limit - len(selected))
        for article in candidates[:quota]:
            selected.append(article)
            used_links.add(article.link)
        logger.info("Category %s: guaranteed %d articles", category, quota)

    # Phase 2: remaining slots by final score
    remaining = limit - len(selected)
    fill = [a for a in ranked if a.link not in used_links][:remaining]
    selected.extend(fill)
    logger.info("Filled %d remaining slots by final score", len(fill))

    counts = Counter(a.category for a in selected)
    logger.info(
        "Selected %d articles (%s)",
        len(selected),
        ", ".join(f"{c}={n}" for c, n in counts.items()),
    )
    return selected
