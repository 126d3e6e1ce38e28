"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from levelboard.config import settings
from levelboard.core.errors import LevelboardError
from levelboard.core.feed_cache import FeedCache
from levelboard.core.logger import setup_logging
from levelboard.db.redis import close_redis, get_redis_client, redis_available
from levelboard.services.dataset_service import dataset_service

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: initial dataset load (views answer 503 until one succeeds)
    if settings.FEED_CACHE_ENABLED:
        client = get_redis_client()
        if await redis_available(client):
            dataset_service.configure(cache=FeedCache(client))
    if not dataset_service.is_loaded:
        try:
            await dataset_service.refresh()
        except LevelboardError as exc:
            logger.error("Initial dataset load failed: %s", exc)
    yield
    # Shutdown: close connections
    await close_redis()


app = FastAPI(
    title="Levelboard API",
    description="Catalog and creator leaderboards for curator-rated community levels",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

# --- Routes ---
from levelboard.api.routes import levels, creators, leaderboard, dataset  # noqa: E402

app.include_router(levels.router, prefix="/api/levels", tags=["levels"])
app.include_router(creators.router, prefix="/api/creators", tags=["creators"])
app.include_router(leaderboard.router, prefix="/api/leaderboard", tags=["leaderboard"])
app.include_router(dataset.router, prefix="/api/dataset", tags=["dataset"])


@app.get("/health")
async def health_check():
    return {"status": "ok", "dataset_loaded": dataset_service.is_loaded}
