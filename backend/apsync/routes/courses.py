"""
AP Exam Sync: Course Route Handlers
====================================

What:  POST /api/courses, GET /api/courses/{id}, PUT /api/courses/{id}.
How:   Extracts path/body, delegates to CourseService, returns the course.
Who:   Called by the front-end course editor (development tooling).
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends

from apsync.models.document import Course
from apsync.schemas.common import ErrorResponse
from apsync.schemas.course import CourseCreate
from apsync.services.course_service import course_service
from apsync.store import DocumentStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Courses"])


@router.post(
    "/courses",
    response_model=Course,
    responses={
        400: {"description": "Missing title or description", "model": ErrorResponse},
    },
    summary="Create a course",
)
async def create_course(
    payload: Optional[CourseCreate] = Body(default=None),
    store: DocumentStore = Depends(get_store),
) -> Course:
    """Append a course with a generated id; icon defaults to 📘 and notes to ""."""
    return await course_service.create_course(store, payload or CourseCreate())


@router.put(
    "/courses/{course_id}",
    response_model=Course,
    responses={
        404: {"description": "Course not found", "model": ErrorResponse},
    },
    summary="Merge fields into a course",
    description=(
        "Merges every field of the JSON body into the stored course without a "
        "schema, including `id`. Values are stored as sent. Changing `id` moves the "
        "course to the new id. An empty body leaves the course unchanged."
    ),
)
async def update_course(
    course_id: str,
    updates: Optional[Dict[str, Any]] = Body(default=None),
    store: DocumentStore = Depends(get_store),
) -> Course:
    return await course_service.update_course(store, course_id, updates or {})


@router.get(
    "/courses/{course_id}",
    response_model=Course,
    responses={
        404: {"description": "Course not found", "model": ErrorResponse},
    },
    summary="Get a single course by ID",
)
async def get_course(
    course_id: str,
    store: DocumentStore = Depends(get_store),
) -> Course:
    return await course_service.get_course(store, course_id)
