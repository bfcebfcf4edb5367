import logging
import re
import warnings
from datetime import datetime, timedelta, timezone

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning
from dateutil import parser as dtparser

from src.modules.fetcher.schemas import RawEntry
from src.modules.normalizer.schemas import Article

logger = logging.getLogger(__name__)

MAX_DESCRIPTION_LENGTH = 500

warnings.filterwarnings("ignore", category=MarkupResemblesLocatorWarning)

# RFC 822 zone names dateutil does not resolve on its own
TZINFOS = {
    "EST": timezone(timedelta(hours=-5)),
    "EDT": timezone(timedelta(hours=-4)),
    "CST": timezone(timedelta(hours=-6)),
    "CDT": timezone(timedelta(hours=-5)),
    "MST": timezone(timedelta(hours=-7)),
    "MDT": timezone(timedelta(hours=-6)),
    "PST": timezone(timedelta(hours=-8)),
    "PDT": timezone(timedelta(hours=-7)),
    "GMT": timezone.utc,
    "UT": timezone.utc,
    "UTC": timezone.utc,
    "Z": timezone.utc,
}


def strip_html(markup: str | None) -> str:
    if not markup:
        return ""
    text = BeautifulSoup(markup, "lxml").get_text()
    return re.sub(r"\s+", " ", text).strip()


def parse_date(value: str | None, fallback: datetime) -> datetime:
    if not value:
        return fallback
    try:
        parsed = dtparser.parse(value, tzinfos=TZINFOS)
    except (ValueError, OverflowError):
        logger.debug("Unparseable date %r, using fetch time", value)
        return fallback
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


class NormalizerService:
    """Maps raw feed entries onto the canonical ``Article`` record."""

    def normalize(self, entry: RawEntry) -> Article:
        body = entry.content_snippet or entry.content or entry.description
        return Article(
            title=(entry.title or "").strip(),
            link=(entry.link or "").strip(),
            date=parse_date(entry.published, entry.fetched_at),
            category=entry.category,
            description=strip_html(body)[:MAX_DESCRIPTION_LENGTH],
        )

    def normalize_all(self, entries: list[RawEntry]) -> list[Article]:
        articles = [self.normalize(entry) for entry in entries]
        logger.info("Normalized %d entries", len(articles))
        return articles


normalizer_service = NormalizerService()
