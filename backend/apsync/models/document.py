"""
AP Exam Sync: Document Models
==============================

What:  Pydantic models for the single JSON document persisted by the store.
How:   Python attributes are snake_case; the on-disk and wire names are
       camelCase via an alias generator (`community_notes` ↔ `communityNotes`).
Who:   Loaded and dumped by DocumentStore; mutated by the services.

Document layout:
    {
        "courses":        [Course, ...],
        "users":          [User, ...],
        "communityNotes": [CommunityNote, ...],
        "analytics":      {"sessions": []}
    }

Lookups are linear scans over the collections. There are no indexes.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt
from pydantic.alias_generators import to_camel

# Ratings keep the JSON number type they were submitted with; strings and
# booleans are rejected rather than coerced
RatingValue = Union[StrictInt, StrictFloat]


def new_id() -> str:
    """Opaque identifier for newly created courses, users and notes."""
    return str(uuid.uuid4())


def utc_timestamp() -> str:
    """Current UTC time as ISO 8601 with milliseconds, e.g. 2024-01-15T12:00:00.000Z."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class CamelModel(BaseModel):
    """Base model serializing attribute names as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Course(CamelModel):
    """
    A study course.

    Course updates merge the request body verbatim, so every field is loosely
    typed and unknown fields are kept. A course may hold a null title or a
    non-list `links` after an update; readers must not assume otherwise.
    `links` entries ({title, url} when created by the app) are stored as sent.
    """

    model_config = ConfigDict(extra="allow")

    id: Any
    title: Any
    icon: Any = "📘"
    description: Any
    notes: Any = ""
    links: Any = Field(default_factory=list)


class User(CamelModel):
    """A registered user. The password is stored in plaintext (demo only)."""

    id: str
    email: str
    password: str
    name: str
    created_at: str = Field(default_factory=utc_timestamp)


class Rating(CamelModel):
    """One user's rating of a note; unique per user_id within a note."""

    user_id: str
    rating: RatingValue


class CommunityNote(CamelModel):
    """
    A note shared by a user under a course.

    `author` is the author's name copied at creation time and never
    refreshed. `course_id` is not checked against the course list.
    """

    id: str
    course_id: str
    title: str
    content: str
    author: str
    author_id: str
    created_at: str = Field(default_factory=utc_timestamp)
    downloads: int = 0
    ratings: List[Rating] = Field(default_factory=list)
    average_rating: float = 0

    def find_rating(self, user_id: str) -> Optional[Rating]:
        return next((r for r in self.ratings if r.user_id == user_id), None)


class Analytics(CamelModel):
    """Present in the document for the front-end; no endpoint reads or writes it."""

    model_config = ConfigDict(extra="allow")

    sessions: List[Any] = Field(default_factory=list)


class Document(CamelModel):
    """The whole persisted state: every collection in one object."""

    model_config = ConfigDict(extra="allow")

    courses: List[Course] = Field(default_factory=list)
    users: List[User] = Field(default_factory=list)
    community_notes: List[CommunityNote] = Field(default_factory=list)
    analytics: Analytics = Field(default_factory=Analytics)

    # ── Linear-scan lookups ───────────────────────────────────────────────

    def find_course(self, course_id: str) -> Optional[Course]:
        return next((c for c in self.courses if c.id == course_id), None)

    def course_index(self, course_id: str) -> Optional[int]:
        for index, course in enumerate(self.courses):
            if course.id == course_id:
                return index
        return None

    def find_user(self, user_id: str) -> Optional[User]:
        return next((u for u in self.users if u.id == user_id), None)

    def find_user_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.users if u.email == email), None)

    def find_note(self, note_id: str) -> Optional[CommunityNote]:
        return next((n for n in self.community_notes if n.id == note_id), None)
