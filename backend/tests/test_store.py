"""
AP Exam Sync: Document Store Tests
===================================

What we test:
    ✅ Missing file loads as a seeded document without writing
    ✅ initialize() writes the seeded document once
    ✅ persist() writes camelCase JSON that load() reads back
    ✅ Failed transactions leave the file unchanged
    ✅ Corrupt JSON raises StoreError; a bare null is an empty document
"""

import asyncio
import json

import pytest

from apsync.exceptions import StoreError
from apsync.models.document import Course, User
from apsync.store import DocumentStore, SEED_COURSES


class TestLoad:

    @pytest.mark.asyncio
    async def test_missing_file_is_seeded_in_memory(self, store, db_file):
        doc = await store.load()

        assert [c.id for c in doc.courses] == ["c1", "c2", "c3"]
        assert doc.users == []
        assert doc.community_notes == []
        assert doc.analytics.sessions == []
        assert not db_file.exists()

    @pytest.mark.asyncio
    async def test_blank_file_counts_as_missing(self, store, db_file):
        db_file.parent.mkdir(parents=True)
        db_file.write_text("   \n", encoding="utf-8")

        doc = await store.load()

        assert len(doc.courses) == 3

    @pytest.mark.asyncio
    async def test_null_document_counts_as_missing(self, store, db_file):
        db_file.parent.mkdir(parents=True)
        db_file.write_text("null\n", encoding="utf-8")

        doc = await store.load()

        assert [c.id for c in doc.courses] == ["c1", "c2", "c3"]
        assert doc.users == []

    @pytest.mark.asyncio
    async def test_seeding_can_be_disabled(self, db_file):
        doc = await DocumentStore(str(db_file), seed_courses=False).load()
        assert doc.courses == []

    @pytest.mark.asyncio
    async def test_corrupt_json_raises_store_error(self, store, db_file):
        db_file.parent.mkdir(parents=True)
        db_file.write_text("{not json", encoding="utf-8")

        with pytest.raises(StoreError) as exc_info:
            await store.load()

        assert exc_info.value.context["path"] == str(db_file)

    @pytest.mark.asyncio
    async def test_unknown_top_level_keys_survive(self, store, db_file):
        db_file.parent.mkdir(parents=True)
        db_file.write_text(
            json.dumps({"courses": [], "users": [], "communityNotes": [], "theme": "dark"}),
            encoding="utf-8",
        )

        await store.load()
        await store.persist()

        assert json.loads(db_file.read_text(encoding="utf-8"))["theme"] == "dark"


class TestInitialize:

    @pytest.mark.asyncio
    async def test_creates_seeded_file(self, store, db_file):
        await store.initialize()

        on_disk = json.loads(db_file.read_text(encoding="utf-8"))
        assert [c["id"] for c in on_disk["courses"]] == [c["id"] for c in SEED_COURSES]
        assert on_disk["communityNotes"] == []
        assert on_disk["analytics"] == {"sessions": []}

    @pytest.mark.asyncio
    async def test_existing_courses_are_kept(self, store, db_file):
        db_file.parent.mkdir(parents=True)
        db_file.write_text(
            json.dumps({"courses": [{"id": "x", "title": "T", "description": "D"}]}),
            encoding="utf-8",
        )

        await store.initialize()

        doc = await store.load()
        assert [c.id for c in doc.courses] == ["x"]


class TestTransaction:

    @pytest.mark.asyncio
    async def test_mutation_is_persisted(self, store, db_file):
        async with store.transaction() as doc:
            doc.users.append(User(id="u1", email="a@b.com", password="x", name="A"))

        on_disk = json.loads(db_file.read_text(encoding="utf-8"))
        assert on_disk["users"][0]["email"] == "a@b.com"
        assert "createdAt" in on_disk["users"][0]
        assert not db_file.with_name("db.json.tmp").exists()

    @pytest.mark.asyncio
    async def test_failed_block_does_not_write(self, store, db_file):
        await store.initialize()
        before = db_file.read_text(encoding="utf-8")

        with pytest.raises(RuntimeError):
            async with store.transaction() as doc:
                doc.courses.clear()
                raise RuntimeError("boom")

        assert db_file.read_text(encoding="utf-8") == before

    @pytest.mark.asyncio
    async def test_concurrent_transactions_do_not_lose_writes(self, store):
        await store.initialize()

        async def add_course(i):
            async with store.transaction() as doc:
                doc.courses.append(Course(id=f"k{i}", title=f"T{i}", description="D"))

        await asyncio.gather(*(add_course(i) for i in range(10)))

        doc = await store.snapshot()
        assert len(doc.courses) == 13

    @pytest.mark.asyncio
    async def test_external_edits_are_picked_up(self, store, db_file):
        await store.initialize()
        raw = json.loads(db_file.read_text(encoding="utf-8"))
        raw["courses"] = raw["courses"][:1]
        db_file.write_text(json.dumps(raw), encoding="utf-8")

        doc = await store.snapshot()

        assert [c.id for c in doc.courses] == ["c1"]
