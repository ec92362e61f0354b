"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from showcase.config import Settings
from showcase.db.database import close_database, connect_database
from showcase.db.submission_store import SubmissionStore
from showcase.main import create_app


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a temporary store file and uploads directory."""
    return Settings(
        database_path=tmp_path / "database" / "database.sqlite",
        upload_path=tmp_path / "uploads",
    )


@pytest.fixture
async def db(tmp_path: Path):
    """A bare connection to a fresh database."""
    connection = await connect_database(tmp_path / "store.sqlite")
    yield connection
    await close_database(connection)


@pytest.fixture
async def store(db) -> SubmissionStore:
    return SubmissionStore(db)


@pytest.fixture
async def app(settings: Settings) -> AsyncGenerator[FastAPI, None]:
    """An application with its lifespan running."""
    application = create_app(settings)
    async with application.router.lifespan_context(application):
        yield application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
