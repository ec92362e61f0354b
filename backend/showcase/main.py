"""FastAPI application entry point."""

import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from showcase import __version__
from showcase.api import errors, submissions
from showcase.config import Settings
from showcase.db.database import close_database, connect_database
from showcase.db.submission_store import SubmissionStore
from showcase.storage.image_store import ImageStore

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stdout,
    )


def ensure_directory(path: Path, label: str) -> None:
    """Create a directory on startup if it does not exist yet."""
    if not path.exists():
        path.mkdir(parents=True, exist_ok=True)
        logger.info(f"{label} directory created: {path}")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown."""
    settings: Settings = app.state.settings

    # Startup
    db = await connect_database(settings.database_path)
    app.state.submission_store = SubmissionStore(db)
    app.state.image_store = ImageStore(settings.upload_path)

    yield

    # Shutdown
    app.state.submission_store = None
    await close_database(db)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create the submissions application."""
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    ensure_directory(settings.database_path.parent, "Database")
    ensure_directory(settings.upload_path, "Uploads")

    app = FastAPI(
        title="Showcase Submissions",
        description="Collect a name, a social-media handle and up to five images per submission",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # CORS must be the outermost middleware so error responses carry its headers
    errors.register_error_handlers(app)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    app.include_router(submissions.router, prefix="/api", tags=["submissions"])
    app.mount("/uploads", StaticFiles(directory=settings.upload_path), name="uploads")

    return app
