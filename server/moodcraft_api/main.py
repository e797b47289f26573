"""MoodCraft API - FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mood_engine.storage import StorageBackend

from .config import Settings, get_settings
from .engine import build_engine
from .routes import dashboard, entries, music, stream

log = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, backend: Optional[StorageBackend] = None) -> FastAPI:
    """
    Build the API with its own engine instance.

    Args:
        settings: Settings to use; defaults to the cached environment settings
        backend: Optional storage backend override
    """
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    engine = build_engine(settings, backend=backend)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log.info(f"[API] MoodCraft API ready, history key '{settings.history_key}'")
        yield
        engine.close()

    app = FastAPI(
        title="MoodCraft API",
        description="Mood journaling, trends and music suggestions backed by a local history",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.engine = engine

    # Configure CORS for frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(entries.router)
    app.include_router(dashboard.router)
    app.include_router(music.router)
    app.include_router(stream.router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint for the API."""
        return {"status": "healthy", "service": "moodcraft-api"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "server.moodcraft_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
    )
