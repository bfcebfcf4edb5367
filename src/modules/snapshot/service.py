import json
import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo

from src.modules.snapshot.schemas import Snapshot
from src.modules.summarizer.schemas import SummarizedArticle

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "Asia/Shanghai"


def format_update_time(moment: datetime, tz_name: str = DEFAULT_TIMEZONE) -> str:
    """Format like a zh-CN locale string, e.g. ``2024/3/7 08:05:09``."""
    local = moment.astimezone(ZoneInfo(tz_name))
    return f"{local.year}/{local.month}/{local.day} {local:%H:%M:%S}"


class SnapshotService:
    def __init__(self, tz_name: str = DEFAULT_TIMEZONE) -> None:
        self._tz_name = tz_name

    def build(
        self,
        articles: list[SummarizedArticle],
        categories: list[str],
        now: datetime,
    ) -> Snapshot:
        return Snapshot(
            last_updated=now,
            update_time=format_update_time(now, self._tz_name),
            total_articles=len(articles),
            categories=categories,
            articles=articles,
        )

    def write(self, snapshot: Snapshot, path: Path) -> Path:
        """Replace the file at ``path`` with ``snapshot`` in one rename."""
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = snapshot.model_dump(mode="json", by_alias=True, exclude_none=True)
        body = json.dumps(payload, ensure_ascii=False, indent=2)

        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(body)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.info("Snapshot saved to %s (%d articles)", path, snapshot.total_articles)
        return path
