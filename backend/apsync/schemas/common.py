"""
AP Exam Sync: Shared Response Schemas
======================================

What:  Response models shared across routes: errors, the full data export,
       the delete acknowledgement and the health report.
Who:   Used by route handlers as `response_model` / `responses` entries.
"""

from typing import List

from pydantic import Field

from apsync.models.document import Analytics, CamelModel, CommunityNote, Course


class ErrorResponse(CamelModel):
    """
    Error body returned by every failing endpoint.

    Example:
        {"error": "Note not found"}
    """
    error: str = Field(description="Human-readable error message")


class PublicUser(CamelModel):
    """A user as exposed over the API: never includes the password."""
    id: str
    email: str
    name: str


class DataResponse(CamelModel):
    """
    Everything the front-end needs on startup.

    Returned by GET /api/data. Users are reduced to id, name and email.
    """
    courses: List[Course] = Field(default_factory=list)
    community_notes: List[CommunityNote] = Field(default_factory=list)
    users: List[PublicUser] = Field(default_factory=list)
    analytics: Analytics = Field(default_factory=Analytics)


class SuccessResponse(CamelModel):
    success: bool = True


class HealthResponse(CamelModel):
    """
    Health check response.

    Fields:
        status:          healthy | unhealthy
        store:           readable | unreadable
        uptime_seconds:  Seconds since the process loaded the routes
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    store: str = Field(description="Document store status: readable, unreadable")
    uptime_seconds: float = Field(description="Seconds since service started")
