"""Dataset status Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel


class DiagnosticItem(BaseModel):
    severity: str
    category: str
    message: str
    level_id: str | None = None
    creator: str | None = None

    model_config = {"from_attributes": True}


class DatasetStatus(BaseModel):
    loaded_at: datetime
    speedrun_levels: int
    hard_levels: int
    creators: int
    profiles: int
    diagnostics: list[DiagnosticItem]
