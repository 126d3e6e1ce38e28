"""Dataset endpoints - load status, diagnostics and manual refresh."""

from fastapi import APIRouter, Depends, HTTPException

from levelboard.api.deps import get_snapshot
from levelboard.core.errors import LevelboardError
from levelboard.core.pipeline import Snapshot
from levelboard.models.level import Category
from levelboard.schemas.dataset import DatasetStatus, DiagnosticItem
from levelboard.services.dataset_service import dataset_service

router = APIRouter()


def _snapshot_to_status(snapshot: Snapshot) -> DatasetStatus:
    return DatasetStatus(
        loaded_at=snapshot.loaded_at,
        speedrun_levels=len(snapshot.levels_for(Category.SPEEDRUN)),
        hard_levels=len(snapshot.levels_for(Category.HARD)),
        creators=len(snapshot.creators),
        profiles=len(snapshot.profiles),
        diagnostics=[DiagnosticItem.model_validate(d) for d in snapshot.diagnostics],
    )


@router.get("/status", response_model=DatasetStatus)
async def get_status(snapshot: Snapshot = Depends(get_snapshot)):
    """Counts and data-integrity findings for the live snapshot."""
    return _snapshot_to_status(snapshot)


@router.post("/refresh", response_model=DatasetStatus)
async def refresh_dataset(force: bool = False):
    """Reload every feed. On failure the previous snapshot keeps serving."""
    try:
        snapshot = await dataset_service.refresh(force=force)
    except LevelboardError as exc:
        # Unreachable feeds as well as a broken rating schema configuration
        raise HTTPException(status_code=502, detail=exc.user_message)
    return _snapshot_to_status(snapshot)
