from apsync.models.document import (
    Analytics,
    CamelModel,
    CommunityNote,
    Course,
    Document,
    Rating,
    User,
    new_id,
    utc_timestamp,
)

__all__ = [
    "Analytics",
    "CamelModel",
    "CommunityNote",
    "Course",
    "Document",
    "Rating",
    "User",
    "new_id",
    "utc_timestamp",
]
