"""
AP Exam Sync: Community Note Service
=====================================

What:  Create, edit, delete and rate community notes.
How:   Each operation checks required fields, then runs one store
       transaction: reload → locate by linear scan → mutate → persist.
Who:   Called by the note route handlers.

Authorization rule (edit and delete):
    allowed  ⇔  request.authorId == note.authorId  OR  request.forceDev

Rating rule:
    One entry per userId. Re-rating replaces the value in place, then
    averageRating = sum(ratings) / len(ratings).
    A rating of 0 is treated as missing and rejected.
"""

import logging
from typing import List, Optional

from apsync.exceptions import ForbiddenError, NotFoundError, ValidationError
from apsync.models.document import CommunityNote, Rating, new_id
from apsync.schemas.note import NoteCreate, NoteDelete, NoteUpdate, RatingSubmit, RatingSummary
from apsync.store import DocumentStore

logger = logging.getLogger(__name__)


def mean_rating(ratings: List[Rating]) -> float:
    """Arithmetic mean of the rating values. Callers never pass an empty list."""
    return sum(r.rating for r in ratings) / len(ratings)


def _check_author(note: CommunityNote, author_id: Optional[str], force_dev: Optional[bool]) -> None:
    if note.author_id != author_id and not force_dev:
        raise ForbiddenError(
            message="Not allowed",
            context={"note_id": note.id, "author_id": author_id},
        )


class NoteService:
    """
    Business logic layer for community notes.

    Error Handling Strategy:
        Field checks run before the store is touched. Lookups that fail raise
        NotFoundError inside the transaction, which skips the write.
    """

    async def create_note(self, store: DocumentStore, payload: NoteCreate) -> CommunityNote:
        """
        Append a note written by an existing user.

        The author's name is copied onto the note (`author`).

        Raises:
            ValidationError: a field is missing ("Missing fields") or
                             authorId matches no user ("Invalid author")
        """
        if not (payload.course_id and payload.title and payload.content and payload.author_id):
            raise ValidationError(message="Missing fields")

        async with store.transaction() as doc:
            user = doc.find_user(payload.author_id)
            if user is None:
                raise ValidationError(
                    message="Invalid author",
                    field="authorId",
                    context={"author_id": payload.author_id},
                )

            note = CommunityNote(
                id=new_id(),
                course_id=payload.course_id,
                title=payload.title,
                content=payload.content,
                author=user.name,
                author_id=payload.author_id,
                downloads=0,
                ratings=[],
                average_rating=0,
            )
            doc.community_notes.append(note)

        logger.info("Note created: %s by %s in course %s", note.id, note.author_id, note.course_id)
        return note

    async def edit_note(self, store: DocumentStore, note_id: str, payload: NoteUpdate) -> CommunityNote:
        """
        Overwrite a note's title and/or content.

        Raises:
            NotFoundError: unknown note ("Note not found")
            ForbiddenError: caller is not the author and forceDev is unset
        """
        async with store.transaction() as doc:
            note = doc.find_note(note_id)
            if note is None:
                raise NotFoundError(message="Note not found", resource="note", resource_id=note_id)

            _check_author(note, payload.author_id, payload.force_dev)

            if payload.title:
                note.title = payload.title
            if payload.content:
                note.content = payload.content

        logger.info("Note edited: %s (forceDev=%s)", note_id, bool(payload.force_dev))
        return note

    async def delete_note(
        self,
        store: DocumentStore,
        note_id: str,
        payload: Optional[NoteDelete] = None,
    ) -> None:
        """
        Remove a note from the collection.

        Raises:
            NotFoundError: unknown note ("Not found")
            ForbiddenError: caller is not the author and forceDev is unset
        """
        payload = payload or NoteDelete()

        async with store.transaction() as doc:
            note = doc.find_note(note_id)
            if note is None:
                raise NotFoundError(message="Not found", resource="note", resource_id=note_id)

            _check_author(note, payload.author_id, payload.force_dev)

            doc.community_notes = [n for n in doc.community_notes if n.id != note_id]

        logger.info("Note deleted: %s (forceDev=%s)", note_id, bool(payload.force_dev))

    async def rate_note(self, store: DocumentStore, note_id: str, payload: RatingSubmit) -> RatingSummary:
        """
        Submit or replace a user's rating and recompute the note's average.

        Raises:
            ValidationError: userId or rating missing/falsy (rating 0 included)
            NotFoundError: unknown note ("Note not found")
        """
        if not payload.user_id or not payload.rating:
            raise ValidationError(message="Missing userId or rating")

        async with store.transaction() as doc:
            note = doc.find_note(note_id)
            if note is None:
                raise NotFoundError(message="Note not found", resource="note", resource_id=note_id)

            existing = note.find_rating(payload.user_id)
            if existing is not None:
                existing.rating = payload.rating
            else:
                note.ratings.append(Rating(user_id=payload.user_id, rating=payload.rating))

            note.average_rating = mean_rating(note.ratings)

        logger.info(
            "Note %s rated %s by %s (average=%.2f over %d)",
            note_id,
            payload.rating,
            payload.user_id,
            note.average_rating,
            len(note.ratings),
        )
        return RatingSummary(average_rating=note.average_rating, ratings_count=len(note.ratings))


note_service = NoteService()
