"""Database module."""

from showcase.db.database import close_database, connect_database, create_schema
from showcase.db.submission_store import SubmissionStore

__all__ = ["connect_database", "close_database", "create_schema", "SubmissionStore"]
