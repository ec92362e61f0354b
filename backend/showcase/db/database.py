"""SQLite database connection and schema initialization."""

import logging
from pathlib import Path

import aiosqlite

logger = logging.getLogger(__name__)


async def connect_database(db_path: str | Path) -> aiosqlite.Connection:
    """Open the database connection and create the schema."""
    # Ensure the data directory exists
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    db = await aiosqlite.connect(db_path)
    db.row_factory = aiosqlite.Row

    # Enable foreign keys
    await db.execute("PRAGMA foreign_keys = ON")

    await create_schema(db)
    logger.info(f"Connected to the SQLite database at {db_path}")
    return db


async def close_database(db: aiosqlite.Connection) -> None:
    """Close the database connection."""
    await db.close()
    logger.info("Database connection closed")


async def create_schema(db: aiosqlite.Connection) -> None:
    """Create database tables and indexes."""
    # Submitters
    await db.execute("""
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            social_media TEXT NOT NULL
        )
    """)

    # Stored images, one row per uploaded file
    await db.execute("""
        CREATE TABLE IF NOT EXISTS images (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id INTEGER NOT NULL,
            filename TEXT NOT NULL,
            FOREIGN KEY (user_id) REFERENCES users(id)
        )
    """)

    await db.execute("""
        CREATE INDEX IF NOT EXISTS idx_images_user
        ON images(user_id, id)
    """)

    await db.commit()
    logger.info("Users and images tables created or already exist")
