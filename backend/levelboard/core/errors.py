"""
Exceptions and data-integrity diagnostics for the levelboard core.
"""

from dataclasses import dataclass
from typing import Optional


class LevelboardError(Exception):
    """Base exception carrying an optional caller-facing message."""
    def __init__(self, message: str, user_message: str = None):
        super().__init__(message)
        self.user_message = user_message or message


class MalformedLevelError(LevelboardError):
    """Raised when a level's ratings cannot produce a trustworthy total."""
    def __init__(self, level_id: str, category: str, reason: str):
        super().__init__(
            f"Malformed {category} level '{level_id}': {reason}",
            f"Level '{level_id}' has invalid ratings",
        )
        self.level_id = level_id
        self.category = category
        self.reason = reason


class UnknownRatingSchemaError(LevelboardError):
    """Raised when a level names a schema version the registry does not know."""
    def __init__(self, category: str, version: str):
        super().__init__(f"Unknown rating schema '{version}' for category '{category}'")
        self.category = category
        self.version = version


class RatingSchemaConfigError(LevelboardError):
    """Raised when the rating schema configuration itself is unusable."""
    def __init__(self, details: str):
        super().__init__(f"Invalid rating schema configuration: {details}")


class DatasetLoadError(LevelboardError):
    """Raised when a required feed cannot be fetched or decoded."""
    def __init__(self, source: str, reason: str):
        super().__init__(
            f"Failed to load feed {source}: {reason}",
            "Level data is currently unavailable.",
        )
        self.source = source
        self.reason = reason


class DatasetNotLoadedError(LevelboardError):
    """Raised when a view asks for data before the first successful load."""
    def __init__(self):
        super().__init__(
            "No dataset snapshot has been loaded yet",
            "Level data is still loading, try again shortly.",
        )


@dataclass(frozen=True)
class Diagnostic:
    """One data-integrity finding. Errors exclude the record, warnings keep it."""
    severity: str  # "error" | "warning"
    category: str
    message: str
    level_id: Optional[str] = None
    creator: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.severity == "error"

    @classmethod
    def error(cls, category: str, message: str, level_id: str = None, creator: str = None) -> "Diagnostic":
        return cls("error", category, message, level_id, creator)

    @classmethod
    def warning(cls, category: str, message: str, level_id: str = None, creator: str = None) -> "Diagnostic":
        return cls("warning", category, message, level_id, creator)
