"""Level model - one curator-rated level from a category feed."""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from levelboard.core.errors import Diagnostic

logger = logging.getLogger(__name__)


class Category(str, Enum):
    SPEEDRUN = "speedrun"
    HARD = "hard"


class Level(BaseModel):
    """A rated level. `category` comes from the feed it was loaded from."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    name: str
    creator: str | None = None  # checked by the aggregator, not here
    category: Category
    ratings: dict[str, Any] = Field(default_factory=dict)  # validated against a rating schema
    schema_version: str | None = Field(
        default=None, validation_alias=AliasChoices("schema_version", "schemaVersion")
    )
    created: datetime | None = None
    thumbnail: str = ""
    link: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        # Feeds use numeric ids as often as string ones
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("thumbnail", "link", mode="before")
    @classmethod
    def _blank_display_fields(cls, value):
        # Display-only; a null here must not cost the level its ratings
        return "" if value is None else value

    @field_validator("created")
    @classmethod
    def _assume_utc(cls, value: datetime | None) -> datetime | None:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


def parse_levels(raw: Any, category: Category) -> tuple[list[Level], list[Diagnostic]]:
    """Validate a decoded level feed.

    Structurally broken records are reported and skipped; the rest of the
    batch is kept. Any `type`/`category` field in the content is ignored in
    favour of the feed's own category.
    """
    category = Category(category)
    levels: list[Level] = []
    diagnostics: list[Diagnostic] = []

    if not isinstance(raw, list):
        diagnostics.append(Diagnostic.error(category.value, "feed is not a JSON array"))
        return levels, diagnostics

    for index, record in enumerate(raw):
        if not isinstance(record, dict):
            diagnostics.append(
                Diagnostic.error(category.value, f"record #{index} is not an object")
            )
            continue

        data = {k: v for k, v in record.items() if k not in ("type", "category")}
        data["category"] = category
        try:
            levels.append(Level.model_validate(data))
        except ValidationError as exc:
            first = exc.errors()[0]
            field = ".".join(str(part) for part in first["loc"])
            message = f"record #{index} rejected: {field}: {first['msg']}"
            logger.warning("%s feed: %s", category.value, message)
            level_id = record.get("id")
            diagnostics.append(
                Diagnostic.error(
                    category.value,
                    message,
                    level_id=str(level_id) if level_id is not None else None,
                    creator=record.get("creator") if isinstance(record.get("creator"), str) else None,
                )
            )

    return levels, diagnostics
