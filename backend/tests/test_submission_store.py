"""Tests for the submission store."""

import asyncio

import aiosqlite
import pytest

from showcase.db.submission_store import SubmissionStore


async def _count(db: aiosqlite.Connection, table: str) -> int:
    cursor = await db.execute(f"SELECT COUNT(*) FROM {table}")
    row = await cursor.fetchone()
    return row[0]


class TestSchema:
    """Tests for schema creation."""

    async def test_tables_exist(self, db):
        cursor = await db.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name IN ('users', 'images')"
        )
        names = {row["name"] for row in await cursor.fetchall()}
        assert names == {"users", "images"}

    async def test_foreign_keys_enabled(self, db):
        cursor = await db.execute("PRAGMA foreign_keys")
        row = await cursor.fetchone()
        assert row[0] == 1


class TestCreateSubmission:
    """Tests for the transactional write path."""

    async def test_returns_generated_id(self, store: SubmissionStore):
        first = await store.create_submission("Alice", "@alice", ["1.png"])
        second = await store.create_submission("Bob", "@bob", ["2.png"])
        assert first == 1
        assert second == 2

    async def test_images_linked_in_order(self, store: SubmissionStore):
        submitter_id = await store.create_submission(
            "Alice", "@alice", ["a.png", "b.jpg", "c.gif"]
        )

        submission = await store.get_submission(submitter_id)

        assert submission is not None
        assert submission.name == "Alice"
        assert submission.social_media == "@alice"
        assert submission.images == ["a.png", "b.jpg", "c.gif"]

    async def test_duplicate_filenames_are_kept(self, store: SubmissionStore):
        submitter_id = await store.create_submission("Alice", "@alice", ["a.png", "a.png"])
        submission = await store.get_submission(submitter_id)
        assert submission.images == ["a.png", "a.png"]

    async def test_failed_image_insert_rolls_back_submitter(self, store: SubmissionStore, db):
        # A NULL filename violates the NOT NULL constraint on the second insert
        with pytest.raises(aiosqlite.IntegrityError):
            await store.create_submission("Alice", "@alice", ["a.png", None])

        assert await _count(db, "users") == 0
        assert await _count(db, "images") == 0

    async def test_cancelled_write_leaves_nothing_behind(
        self, store: SubmissionStore, db, monkeypatch
    ):
        async def cancelled_insert(submitter_id, filename):
            raise asyncio.CancelledError

        monkeypatch.setattr(store, "_insert_image", cancelled_insert)
        with pytest.raises(asyncio.CancelledError):
            await store.create_submission("Alice", "@alice", ["a.png"])
        monkeypatch.undo()

        await store.create_submission("Bob", "@bob", ["b.png"])
        submissions = await store.list_submissions()

        assert [(s.name, s.images) for s in submissions] == [("Bob", ["b.png"])]
        assert await _count(db, "users") == 1

    async def test_store_usable_after_rollback(self, store: SubmissionStore):
        with pytest.raises(aiosqlite.IntegrityError):
            await store.create_submission("Alice", "@alice", [None])

        submitter_id = await store.create_submission("Bob", "@bob", ["b.png"])
        submissions = await store.list_submissions()

        assert [s.id for s in submissions] == [submitter_id]
        assert submissions[0].images == ["b.png"]


class TestSinglePrimitives:
    """Tests for single-row inserts."""

    async def test_submitter_without_images(self, store: SubmissionStore):
        submitter_id = await store.create_submitter("Carol", "@carol")

        submission = await store.get_submission(submitter_id)

        assert submission.images == []

    async def test_add_image_to_existing_submitter(self, store: SubmissionStore):
        submitter_id = await store.create_submitter("Carol", "@carol")
        await store.add_image(submitter_id, "x.png")

        submission = await store.get_submission(submitter_id)

        assert submission.images == ["x.png"]

    async def test_add_image_requires_existing_submitter(self, store: SubmissionStore):
        with pytest.raises(aiosqlite.IntegrityError):
            await store.add_image(999, "orphan.png")


class TestListSubmissions:
    """Tests for the join-and-group read path."""

    async def test_empty(self, store: SubmissionStore):
        assert await store.list_submissions() == []

    async def test_one_record_per_submitter(self, store: SubmissionStore):
        await store.create_submission("Alice", "@alice", ["a1.png", "a2.png"])
        await store.create_submitter("Carol", "@carol")
        await store.create_submission("Bob", "@bob", ["b1.png"])

        submissions = await store.list_submissions()

        assert [(s.name, s.images) for s in submissions] == [
            ("Alice", ["a1.png", "a2.png"]),
            ("Carol", []),
            ("Bob", ["b1.png"]),
        ]

    async def test_filenames_with_commas_survive(self, store: SubmissionStore):
        await store.create_submission("Alice", "@alice", ["a,b.png", "c.png"])
        submissions = await store.list_submissions()
        assert submissions[0].images == ["a,b.png", "c.png"]

    async def test_listing_is_idempotent(self, store: SubmissionStore):
        await store.create_submission("Alice", "@alice", ["a.png"])
        assert await store.list_submissions() == await store.list_submissions()

    async def test_get_missing_submission(self, store: SubmissionStore):
        assert await store.get_submission(42) is None
