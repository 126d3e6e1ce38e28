"""Shared route dependencies."""

from fastapi import HTTPException

from levelboard.core.errors import DatasetNotLoadedError
from levelboard.core.pipeline import Snapshot
from levelboard.services.dataset_service import dataset_service


async def get_snapshot() -> Snapshot:
    """FastAPI dependency returning the live snapshot, or 503 before the first load."""
    try:
        return dataset_service.snapshot
    except DatasetNotLoadedError as exc:
        raise HTTPException(status_code=503, detail=exc.user_message)
