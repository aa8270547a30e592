"""
AP Exam Sync: Data Export Route
================================

What:  GET /api/data returns every collection in one payload.
Who:   Called by the sync client's `load_remote_data()` on startup.
"""

from fastapi import APIRouter, Depends

from apsync.schemas.common import DataResponse
from apsync.services.data_service import data_service
from apsync.store import DocumentStore, get_store

router = APIRouter(prefix="/api", tags=["Data"])


@router.get(
    "/data",
    response_model=DataResponse,
    summary="Fetch all client data",
    description=(
        "Returns courses, community notes, users (id, name and email only) and "
        "analytics. Passwords are never included."
    ),
)
async def get_data(store: DocumentStore = Depends(get_store)) -> DataResponse:
    return await data_service.export(store)
