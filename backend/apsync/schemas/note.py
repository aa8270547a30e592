"""
AP Exam Sync: Community Note Request/Response Schemas
======================================================

What:  Pydantic models for the note endpoints (create, edit, delete, rate).
How:   Wire names are camelCase (`courseId`, `authorId`, `forceDev`).
       Fields are optional at the schema level; NoteService applies the
       truthiness rules (empty strings and a rating of 0 count as missing).

Bypass flag:
    `forceDev` skips the author check on edit and delete. It is a
    development aid, not an authorization mechanism.
"""

from typing import Optional

from pydantic import Field

from apsync.models.document import CamelModel, RatingValue


class NoteCreate(CamelModel):
    """Body of POST /api/notes. All four fields are required."""
    course_id: Optional[str] = None
    title: Optional[str] = None
    content: Optional[str] = None
    author_id: Optional[str] = None


class NoteUpdate(CamelModel):
    """Body of PUT /api/notes/{id}. Title/content are overwritten only when non-empty."""
    title: Optional[str] = None
    content: Optional[str] = None
    author_id: Optional[str] = None
    force_dev: Optional[bool] = False


class NoteDelete(CamelModel):
    """Optional body of DELETE /api/notes/{id}."""
    author_id: Optional[str] = None
    force_dev: Optional[bool] = False


class RatingSubmit(CamelModel):
    """Body of POST /api/notes/{id}/rate."""
    user_id: Optional[str] = None
    rating: Optional[RatingValue] = None


class RatingSummary(CamelModel):
    """
    Result of a rating submission.

    Example:
        {"averageRating": 3.0, "ratingsCount": 1}
    """
    average_rating: float = Field(description="Mean of all ratings on the note")
    ratings_count: int = Field(description="Number of distinct users who rated the note")
