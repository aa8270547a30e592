"""
AP Exam Sync: Data Export Service
==================================

What:  Builds the full-state payload returned by GET /api/data.
How:   Reloads the document and copies every collection, reducing users to
       their public fields.
"""

from apsync.schemas.common import DataResponse
from apsync.services.auth_service import to_public
from apsync.store import DocumentStore


class DataService:

    async def export(self, store: DocumentStore) -> DataResponse:
        doc = await store.snapshot()
        return DataResponse(
            courses=doc.courses,
            community_notes=doc.community_notes,
            users=[to_public(u) for u in doc.users],
            analytics=doc.analytics,
        )


data_service = DataService()
