"""FastAPI dependencies resolving the per-application services."""

from fastapi import Request

from showcase.config import Settings
from showcase.db.submission_store import SubmissionStore
from showcase.storage.image_store import ImageStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_submission_store(request: Request) -> SubmissionStore:
    """Get the submission store created by the application lifespan."""
    store = getattr(request.app.state, "submission_store", None)
    if store is None:
        raise RuntimeError("Submission store not initialized. Is the app lifespan running?")
    return store


def get_image_store(request: Request) -> ImageStore:
    return request.app.state.image_store
