"""
AP Exam Sync: Health Check Route
=================================

What:  Health check endpoint for monitoring and container probes.
How:   Loads the JSON document and reports whether it is readable.
Who:   Called by Docker health checks and uptime monitors.

Status levels:
    - healthy:   Document readable (HTTP 200)
    - unhealthy: Document unreadable or corrupt (HTTP 200, flagged in body)
"""

import logging
import time

from fastapi import APIRouter, Depends

from apsync import __version__
from apsync.exceptions import StoreError
from apsync.schemas.common import HealthResponse
from apsync.store import DocumentStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Process start, for uptime reporting
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(store: DocumentStore = Depends(get_store)) -> HealthResponse:
    """
    Check that the document store can be read.

    Returns:
        HealthResponse with store status and uptime.
    """
    store_status = "readable"
    overall = "healthy"

    try:
        await store.snapshot()
    except StoreError as e:
        store_status = "unreadable"
        overall = "unhealthy"
        logger.warning("Health check: document store unreadable: %s", e.context)

    return HealthResponse(
        status=overall,
        version=__version__,
        store=store_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
