"""
AP Exam Sync: Custom Exception Hierarchy
=========================================

What:  Application-specific exceptions for each error scenario of the API.
How:   Each exception carries a client-facing message and an optional context
       dict. Global exception handlers (registered in main.py) catch these and
       return `{"error": message}` with the matching HTTP status code.
Who:   Raised by services and the store; caught by global handlers. The
       client package raises `RemoteError` for non-2xx responses.

Exception Hierarchy:
    ApSyncError (base)           → 500 Internal Server Error
    ├── ValidationError          → 400 Bad Request (missing fields, duplicates, bad credentials)
    ├── NotFoundError            → 404 Not Found
    ├── ForbiddenError           → 403 Forbidden (author mismatch without bypass)
    ├── StoreError               → 500 Internal Server Error (document unreadable/unwritable)
    └── RemoteError              → raised client-side for non-2xx responses
"""

from typing import Any, Dict, Optional


class ApSyncError(Exception):
    """
    Base exception for all AP Exam Sync errors.

    Attributes:
        message:  Client-facing error description (returned as `error`)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(ApSyncError):
    """
    Raised when client input fails a business rule.

    When:    Missing required fields, unknown author, duplicate email,
             credentials that match no user.
    HTTP:    400 Bad Request

    Example response:
        {"error": "Missing fields"}
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(ApSyncError):
    """
    Raised when a requested course or note does not exist.

    The message is the exact text returned to the client ("Not found",
    "Note not found"); resource and id are kept in context for logging.

    HTTP:    404 Not Found
    """

    status_code = 404

    def __init__(
        self,
        message: str = "Not found",
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class ForbiddenError(ApSyncError):
    """
    Raised when a note is edited or deleted by someone other than its author
    and the development bypass flag is not set.

    HTTP:    403 Forbidden
    """

    status_code = 403

    def __init__(
        self,
        message: str = "Not allowed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StoreError(ApSyncError):
    """
    Raised when the JSON document cannot be read, parsed or written.

    When:    Corrupt JSON, schema mismatch, permission denied, disk full.
    HTTP:    500 Internal Server Error

    The client always receives a generic message; the path and OS error are
    logged server-side only.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "The data store is unavailable. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RemoteError(ApSyncError):
    """
    Raised by the sync client when the server answers with a non-2xx status.

    Attributes:
        status_code: HTTP status returned by the server
        message:     The server's `error` text, or the helper's fallback
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["status_code"] = status_code
        super().__init__(message=message, context=ctx)
        self.status_code = status_code
