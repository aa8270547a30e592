"""
AP Exam Sync: Course Service
=============================

What:  Create, fetch and update courses in the document store.
Who:   Called by the course route handlers.

Update semantics:
    PUT merges every field of the request body into the stored course,
    `id` included. An id change is applied and logged as a warning; the
    course is then only reachable under its new id. Values are not checked:
    `{"title": null}` or `{"links": "none"}` are stored as sent. This is
    unsafe and kept for compatibility with existing clients.
"""

import logging
from typing import Any, Dict

from apsync.exceptions import NotFoundError, ValidationError
from apsync.models.document import Course, new_id
from apsync.schemas.course import CourseCreate
from apsync.store import DocumentStore

logger = logging.getLogger(__name__)

DEFAULT_ICON = "📘"


class CourseService:
    """
    Business logic for courses.

    Responsibilities:
        - create_course(): presence check, id generation, append
        - get_course(): lookup with not-found handling
        - update_course(): unvalidated field merge
    """

    async def create_course(self, store: DocumentStore, payload: CourseCreate) -> Course:
        """
        Append a new course.

        Raises:
            ValidationError: title or description missing/empty (→ 400)
        """
        if not payload.title or not payload.description:
            raise ValidationError(message="Missing title/description")

        course = Course(
            id=new_id(),
            title=payload.title,
            icon=payload.icon or DEFAULT_ICON,
            description=payload.description,
            notes=payload.notes or "",
            links=[],
        )

        async with store.transaction() as doc:
            doc.courses.append(course)

        logger.info("Course created: %s (%s)", course.id, course.title)
        return course

    async def get_course(self, store: DocumentStore, course_id: str) -> Course:
        """
        Fetch one course by id.

        Raises:
            NotFoundError: no course has this id (→ 404)
        """
        doc = await store.snapshot()
        course = doc.find_course(course_id)
        if course is None:
            raise NotFoundError(message="Not found", resource="course", resource_id=course_id)
        return course

    async def update_course(
        self,
        store: DocumentStore,
        course_id: str,
        updates: Dict[str, Any],
    ) -> Course:
        """
        Merge arbitrary fields into an existing course.

        Args:
            updates: The raw JSON object from the request body.

        Raises:
            NotFoundError: no course has this id (→ 404)
        """
        async with store.transaction() as doc:
            index = doc.course_index(course_id)
            if index is None:
                raise NotFoundError(message="Not found", resource="course", resource_id=course_id)

            merged = {**doc.courses[index].model_dump(by_alias=True), **updates}
            course = Course.model_validate(merged)

            if course.id != course_id:
                logger.warning(
                    "Course %s renamed to id %s by update; old id no longer resolves",
                    course_id,
                    course.id,
                )

            doc.courses[index] = course

        logger.info("Course updated: %s (fields: %s)", course.id, ", ".join(sorted(updates)))
        return course


course_service = CourseService()
