from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, field_serializer
from pydantic.alias_generators import to_camel


def iso_timestamp(value: datetime) -> str:
    """Render as UTC ISO-8601 with millisecond precision and a ``Z`` suffix."""
    text = value.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


class Article(BaseModel):
    """Canonical article produced by the normalizer.

    Later stages never mutate an article; they wrap it in a subclass that adds
    the fields they own (scores, summary).
    """

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    title: str
    link: str
    date: datetime
    category: str = ""
    description: str = ""

    @field_serializer("date")
    def _serialize_date(self, value: datetime) -> str:
        return iso_timestamp(value)

    def stage_fields(self) -> dict:
        """Field values keyed by attribute name, for promotion to a later stage."""
        return dict(self)
