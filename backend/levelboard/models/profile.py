"""Profile model - optional display metadata for a creator."""

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from levelboard.core.errors import Diagnostic

logger = logging.getLogger(__name__)

PROFILE_CATEGORY = "profiles"


class Profile(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    avatar: str | None = None
    banner: str | None = None


def parse_profiles(raw: Any) -> tuple[dict[str, Profile], list[Diagnostic]]:
    """Validate a decoded profile feed into a name -> Profile mapping.

    A missing feed (None) is an empty mapping. Duplicate names keep the last record.
    """
    profiles: dict[str, Profile] = {}
    diagnostics: list[Diagnostic] = []

    if raw is None:
        return profiles, diagnostics
    if not isinstance(raw, list):
        diagnostics.append(Diagnostic.warning(PROFILE_CATEGORY, "feed is not a JSON array, ignored"))
        return profiles, diagnostics

    for index, record in enumerate(raw):
        try:
            profile = Profile.model_validate(record)
        except ValidationError as exc:
            message = f"record #{index} rejected: {exc.errors()[0]['msg']}"
            logger.warning("profile feed: %s", message)
            diagnostics.append(Diagnostic.warning(PROFILE_CATEGORY, message))
            continue
        if profile.name in profiles:
            diagnostics.append(
                Diagnostic.warning(
                    PROFILE_CATEGORY,
                    f"duplicate profile '{profile.name}', keeping the later record",
                    creator=profile.name,
                )
            )
        profiles[profile.name] = profile

    return profiles, diagnostics
