"""
AP Exam Sync: JSON Document Store
==================================

What:  Loads, mutates and rewrites the single JSON document holding every
       collection (courses, users, communityNotes, analytics).
How:   The document is read from disk into a `Document` model, mutated in
       memory by services, and written back as a full-document rewrite
       (temporary file + atomic rename). File I/O uses aiofiles.
Who:   Created by the application factory and stored on `app.state.store`;
       injected into route handlers via the `get_store` dependency.
When:  Every request reloads the document before reading or mutating it.

Write discipline:
    Each store owns one asyncio.Lock. `transaction()` holds it across
    reload → mutate → persist, so requests served by one process never
    interleave their read-modify-write cycles. Separate processes pointing at
    the same file are not coordinated (last write wins).

    ┌───────────┐    ┌──────────┐    ┌──────────┐    ┌───────────┐
    │  acquire  │───▶│  load()  │───▶│  mutate  │───▶│ persist() │
    │   lock    │    │ (reread) │    │ (yield)  │    │ (rewrite) │
    └───────────┘    └──────────┘    └──────────┘    └───────────┘
    A block that raises skips persist(); the file keeps its previous content.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, List

import aiofiles
import aiofiles.os
from fastapi import Request
from pydantic import ValidationError as PydanticValidationError

from apsync.exceptions import StoreError
from apsync.models.document import Course, Document

logger = logging.getLogger(__name__)


# ── Seed Data ─────────────────────────────────────────────────────────────
# The same example courses the front-end ships with
SEED_COURSES = [
    {
        "id": "c1",
        "title": "AP Calculus AB",
        "icon": "📊",
        "description": "Master differential and integral calculus",
        "notes": "# AP Calculus AB\n\n## Key Concepts\n- Limits\n- Derivatives\n\n",
        "links": [{"title": "CollegeBoard", "url": "https://apstudents.collegeboard.org"}],
    },
    {
        "id": "c2",
        "title": "AP Physics 1",
        "icon": "⚡",
        "description": "Mechanics & waves",
        "notes": "# AP Physics 1\n\n## Topics\n- Kinematics\n- Dynamics",
        "links": [],
    },
    {
        "id": "c3",
        "title": "AP Chemistry",
        "icon": "🧪",
        "description": "Chemistry principles",
        "notes": "# AP Chemistry\n\n...",
        "links": [],
    },
]


def seed_courses() -> List[Course]:
    """Fresh Course instances for the example courses."""
    return [Course.model_validate(course) for course in SEED_COURSES]


class DocumentStore:
    """
    Handle on one JSON document file.

    Attributes:
        path:          Location of the JSON document
        seed_courses:  Whether a missing/empty document gets the example courses
        data:          The most recently loaded (or mutated) document
    """

    def __init__(self, path: str, seed_courses: bool = True):
        self.path = Path(path)
        self.seed_courses = seed_courses
        self.data = Document()
        self._lock = asyncio.Lock()

    def _fresh_document(self) -> Document:
        if self.seed_courses:
            return Document(courses=seed_courses())
        return Document()

    async def load(self) -> Document:
        """
        Read the on-disk document into memory.

        A missing or blank file, or one holding only `null`, yields a fresh
        document (seeded with the example courses when enabled). Nothing is
        written here.

        Raises:
            StoreError: The file cannot be read or is not a valid document.
        """
        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                raw = await f.read()
        except FileNotFoundError:
            raw = ""
        except OSError as e:
            logger.error("Failed to read document %s: %s", self.path, str(e))
            raise StoreError(context={"path": str(self.path), "os_error": str(e)})

        # A blank file or a bare JSON null counts as an empty document
        if not raw.strip() or raw.strip() == "null":
            self.data = self._fresh_document()
            return self.data

        try:
            self.data = Document.model_validate_json(raw)
        except PydanticValidationError as e:
            logger.error(
                "Document %s is not valid (%d errors): %s",
                self.path,
                e.error_count(),
                str(e).splitlines()[0],
            )
            raise StoreError(context={"path": str(self.path), "error_count": e.error_count()})

        return self.data

    async def persist(self) -> None:
        """
        Serialize the whole in-memory document back to disk.

        The JSON is written to `<file>.tmp` and renamed over the target, so a
        reader never sees a half-written document.

        Raises:
            StoreError: The directory or file is not writable.
        """
        payload = self.data.model_dump_json(by_alias=True, indent=2)
        tmp_path = self.path.with_name(self.path.name + ".tmp")

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
                await f.write(payload)
            await aiofiles.os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error("Failed to write document %s: %s", self.path, str(e))
            raise StoreError(context={"path": str(self.path), "os_error": str(e)})

        logger.debug("Document written: %s (%d bytes)", self.path, len(payload))

    async def initialize(self) -> None:
        """
        Startup hook: make sure the document exists and has courses.

        Seeds the example courses when the course list is empty and writes
        the document if it was missing or seeded.
        """
        async with self._lock:
            existed = await aiofiles.os.path.exists(self.path)
            await self.load()

            seeded = False
            if self.seed_courses and not self.data.courses:
                self.data.courses = seed_courses()
                seeded = True

            if seeded or not existed:
                await self.persist()
                logger.info(
                    "Document initialized at %s with %d courses",
                    self.path,
                    len(self.data.courses),
                )

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[Document, None]:
        """
        Exclusive reload → mutate → persist cycle.

        Usage:
            async with store.transaction() as doc:
                doc.courses.append(course)

        If the block raises, the document is not written.
        """
        async with self._lock:
            document = await self.load()
            yield document
            await self.persist()

    async def snapshot(self) -> Document:
        """Reload the document for read-only use."""
        async with self._lock:
            return await self.load()


# ── Store Dependency ──────────────────────────────────────────────────────
def get_store(request: Request) -> DocumentStore:
    """
    FastAPI dependency returning the application's DocumentStore.

    Example usage in a route:
        @router.get("/courses/{course_id}")
        async def get_course(course_id: str, store: DocumentStore = Depends(get_store)):
            ...
    """
    return request.app.state.store
