"""SubmissionStore - storage layer for submitters and their images."""

import asyncio
import logging
from collections.abc import Sequence

import aiosqlite

from showcase.models import Submission

logger = logging.getLogger(__name__)


class SubmissionStore:
    """Reads and writes the users and images tables.

    All statements go through one shared connection. Transactions on a single
    connection cannot interleave, so every operation holds ``_lock`` for its
    duration; readers never observe half of another request's submission.
    """

    def __init__(self, db: aiosqlite.Connection):
        self.db = db
        self._lock = asyncio.Lock()

    # ==================== Writes ====================

    async def create_submission(
        self, name: str, social_media: str, filenames: Sequence[str]
    ) -> int:
        """Insert a submitter and one image row per filename, all or nothing.

        Returns:
            The generated submitter id.

        Raises:
            aiosqlite.Error: If any insert fails. Nothing is persisted.
        """
        async with self._lock:
            try:
                submitter_id = await self._insert_submitter(name, social_media)
                for filename in filenames:
                    await self._insert_image(submitter_id, filename)
                await self.db.commit()
            except BaseException:
                # Includes cancellation: an open transaction would be committed by the next writer
                await self.db.rollback()
                raise

        logger.info(
            f"Stored submission {submitter_id} for {name!r} with {len(filenames)} image(s)"
        )
        return submitter_id

    async def create_submitter(self, name: str, social_media: str) -> int:
        """Insert a single submitter row without images."""
        async with self._lock:
            try:
                submitter_id = await self._insert_submitter(name, social_media)
                await self.db.commit()
            except BaseException:
                await self.db.rollback()
                raise
        return submitter_id

    async def add_image(self, submitter_id: int, filename: str) -> int:
        """Insert a single image row for an existing submitter."""
        async with self._lock:
            try:
                image_id = await self._insert_image(submitter_id, filename)
                await self.db.commit()
            except BaseException:
                await self.db.rollback()
                raise
        return image_id

    async def _insert_submitter(self, name: str, social_media: str) -> int:
        cursor = await self.db.execute(
            "INSERT INTO users (name, social_media) VALUES (?, ?)",
            (name, social_media),
        )
        return cursor.lastrowid

    async def _insert_image(self, submitter_id: int, filename: str) -> int:
        cursor = await self.db.execute(
            "INSERT INTO images (user_id, filename) VALUES (?, ?)",
            (submitter_id, filename),
        )
        return cursor.lastrowid

    # ==================== Reads ====================

    async def list_submissions(self) -> list[Submission]:
        """List every submitter with their image filenames in upload order."""
        async with self._lock:
            cursor = await self.db.execute(
                """
                SELECT users.id, users.name, users.social_media, images.filename
                FROM users
                LEFT JOIN images ON images.user_id = users.id
                ORDER BY users.id, images.id
                """
            )
            rows = await cursor.fetchall()
        return _group_rows(rows)

    async def get_submission(self, submitter_id: int) -> Submission | None:
        """Get a single submitter with their images, or None if absent."""
        async with self._lock:
            cursor = await self.db.execute(
                """
                SELECT users.id, users.name, users.social_media, images.filename
                FROM users
                LEFT JOIN images ON images.user_id = users.id
                WHERE users.id = ?
                ORDER BY images.id
                """,
                (submitter_id,),
            )
            rows = await cursor.fetchall()

        submissions = _group_rows(rows)
        return submissions[0] if submissions else None


def _group_rows(rows: Sequence[aiosqlite.Row]) -> list[Submission]:
    """Fold joined (submitter, filename) rows into one Submission per submitter."""
    submissions: dict[int, Submission] = {}
    for row in rows:
        submission = submissions.get(row["id"])
        if submission is None:
            submission = Submission(
                id=row["id"],
                name=row["name"],
                social_media=row["social_media"],
            )
            submissions[row["id"]] = submission
        # LEFT JOIN yields a NULL filename for submitters without images
        if row["filename"] is not None:
            submission.images.append(row["filename"])
    return list(submissions.values())
