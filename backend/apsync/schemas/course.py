"""
AP Exam Sync: Course Request Schemas
=====================================

What:  Request bodies for the course endpoints.
How:   Every field is optional at the schema level; presence is checked by
       CourseService so a missing field yields the API's own 400 message
       instead of a schema error.

The update endpoint takes a free-form JSON object (any field may be merged),
so it has no schema here.
"""

from typing import Optional

from apsync.models.document import CamelModel


class CourseCreate(CamelModel):
    """Body of POST /api/courses. `title` and `description` are required."""
    title: Optional[str] = None
    icon: Optional[str] = None
    description: Optional[str] = None
    notes: Optional[str] = None
