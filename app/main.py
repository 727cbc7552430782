import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.generate import router as generate_router
from app.core.config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    if not settings.gemini_api_key:
        logger.warning(
            "startup_configuration",
            extra={"outcome": "missing_api_key", "model": settings.gemini_model},
        )
    yield


app = FastAPI(title="Mediterranean Recipe Ideas", version="0.1.0", lifespan=lifespan)
app.include_router(generate_router)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
