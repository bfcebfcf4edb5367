import logging

from src.modules.normalizer.schemas import Article

logger = logging.getLogger(__name__)


def deduplicate(articles: list[Article]) -> list[Article]:
    """Drop articles whose exact title was already seen; first occurrence wins."""
    seen: set[str] = set()
    unique: list[Article] = []
    for article in articles:
        if article.title in seen:
            continue
        seen.add(article.title)
        unique.append(article)
    logger.info("Deduplicated %d articles down to %d", len(articles), len(unique))
    return unique
