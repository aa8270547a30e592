"""
AP Exam Sync: Community Note Route Handlers
============================================

What:  Create, edit, delete and rate community notes.
How:   Extracts path/body, delegates to NoteService, returns JSON.
Who:   Called by the front-end community notes panel via the sync client.

Route Inventory:
    POST   /api/notes              create (author must exist)
    PUT    /api/notes/{id}         edit (author or forceDev)
    DELETE /api/notes/{id}         delete (author or forceDev; body optional)
    POST   /api/notes/{id}/rate    submit or replace a rating
"""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends

from apsync.models.document import CommunityNote
from apsync.schemas.common import ErrorResponse, SuccessResponse
from apsync.schemas.note import NoteCreate, NoteDelete, NoteUpdate, RatingSubmit, RatingSummary
from apsync.services.note_service import note_service
from apsync.store import DocumentStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Notes"])


@router.post(
    "/notes",
    response_model=CommunityNote,
    responses={
        400: {"description": "Missing fields or unknown author", "model": ErrorResponse},
    },
    summary="Create a community note",
)
async def create_note(
    payload: Optional[NoteCreate] = Body(default=None),
    store: DocumentStore = Depends(get_store),
) -> CommunityNote:
    return await note_service.create_note(store, payload or NoteCreate())


@router.put(
    "/notes/{note_id}",
    response_model=CommunityNote,
    responses={
        403: {"description": "Caller is not the author", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Edit a community note",
)
async def edit_note(
    note_id: str,
    payload: Optional[NoteUpdate] = Body(default=None),
    store: DocumentStore = Depends(get_store),
) -> CommunityNote:
    """
    Overwrite title and/or content.

    Allowed when `authorId` matches the note's author, or when `forceDev`
    is true. Empty strings leave the field unchanged.
    """
    return await note_service.edit_note(store, note_id, payload or NoteUpdate())


@router.delete(
    "/notes/{note_id}",
    response_model=SuccessResponse,
    responses={
        403: {"description": "Caller is not the author", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Delete a community note",
)
async def delete_note(
    note_id: str,
    payload: Optional[NoteDelete] = Body(default=None),
    store: DocumentStore = Depends(get_store),
) -> SuccessResponse:
    await note_service.delete_note(store, note_id, payload)
    return SuccessResponse(success=True)


@router.post(
    "/notes/{note_id}/rate",
    response_model=RatingSummary,
    responses={
        400: {"description": "Missing userId or rating", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Submit or update a rating",
)
async def rate_note(
    note_id: str,
    payload: Optional[RatingSubmit] = Body(default=None),
    store: DocumentStore = Depends(get_store),
) -> RatingSummary:
    """
    Upsert the caller's rating and return the new average and count.

    Example:
        rating 5 then rating 3 by the same user →
        {"averageRating": 3.0, "ratingsCount": 1}
    """
    return await note_service.rate_note(store, note_id, payload or RatingSubmit())
