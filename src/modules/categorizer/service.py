import logging
from collections import Counter

from src.modules.categorizer.schemas import CategoryRule, ScoredArticle
from src.modules.normalizer.schemas import Article

logger = logging.getLogger(__name__)

POINTS_PER_MATCH = 1
TITLE_BONUS = 2
SCORE_PER_POINT = 10
MAX_SCORE = 100


def relevance_score(article: Article, rule: CategoryRule) -> int:
    """Score 0-100 of how strongly ``article`` matches ``rule``.

    Any exclude keyword vetoes the category outright. Each include keyword
    found in the title or description earns one point, plus a bonus when it
    also occurs in the title.
    """
    title = article.title.lower()
    search_text = f"{title} {article.description.lower()}"

    if any(word.lower() in search_text for word in rule.exclude):
        return 0

    points = 0
    for word in rule.include:
        word = word.lower()
        if word in search_text:
            points += POINTS_PER_MATCH
            if word in title:
                points += TITLE_BONUS

    return min(MAX_SCORE, points * SCORE_PER_POINT)


def assign_category(
    article: Article, rules: dict[str, CategoryRule]
) -> ScoredArticle | None:
    """Attach the best-scoring category, or ``None`` when nothing matches.

    Ties go to the category declared first.
    """
    best_category: str | None = None
    best_score = 0
    for category, rule in rules.items():
        score = relevance_score(article, rule)
        if score > best_score:
            best_category, best_score = category, score

    if best_category is None:
        return None
    fields = article.stage_fields() | {"category": best_category}
    return ScoredArticle(**fields, relevance_score=best_score)


class CategorizerService:
    def __init__(self, rules: dict[str, CategoryRule]) -> None:
        self._rules = rules

    def categorize(self, articles: list[Article]) -> list[ScoredArticle]:
        scored: list[ScoredArticle] = []
        for article in articles:
            result = assign_category(article, self._rules)
            if result is not None:
                scored.append(result)

        counts = Counter(article.category for article in scored)
        for category in self._rules:
            logger.info("Category %s: %d articles", category, counts.get(category, 0))
        logger.info(
            "Categorized %d articles, dropped %d unrelated",
            len(scored), len(articles) - len(scored),
        )
        return scored
