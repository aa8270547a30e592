# Schemas package init
"""
AP Exam Sync: API Schemas
==========================

What:  Request and response contracts of the REST API.

Schema Inventory:
    - common.py:  ErrorResponse, PublicUser, DataResponse, SuccessResponse, HealthResponse
    - course.py:  CourseCreate
    - note.py:    NoteCreate, NoteUpdate, NoteDelete, RatingSubmit, RatingSummary
    - auth.py:    SignupRequest, LoginRequest

Stored entities (Course, CommunityNote, ...) live in `apsync.models` and are
returned directly by the endpoints that create or fetch them.
"""
