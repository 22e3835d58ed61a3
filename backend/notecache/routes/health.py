"""
NoteCache Backend — Health Check Route
========================================

What:  Health check endpoint for monitoring and container probes.
Why:   The only dependency is the cache directory; if it disappears after
       startup every request fails, and orchestration should know.
How:   Re-runs the backend's startup check and counts stored notes.
Who:   Called by Docker health checks and monitoring systems.

    Status levels:
    - healthy:   Cache directory present and listable (HTTP 200)
    - unhealthy: Directory missing or unreadable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response

from notecache import __version__
from notecache.dependencies import get_note_store
from notecache.exceptions import ConfigurationError, StorageError
from notecache.schemas.note import HealthResponse
from notecache.services.note_service import NoteStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Track when the service started for uptime reporting
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    response: Response,
    store: NoteStore = Depends(get_note_store),
) -> HealthResponse:
    """
    Check that the cache directory is still usable.

    Why count notes:
        Listing the directory proves it is readable, not merely present,
        and the count is handy on a dashboard.
    """
    status = "healthy"
    note_count = -1

    try:
        store.check()
        note_count = len(await store.backend.names())
    except (ConfigurationError, StorageError) as e:
        status = "unhealthy"
        response.status_code = 503
        logger.warning("Health check: cache unusable: %s", e.message)

    return HealthResponse(
        status=status,
        version=__version__,
        cache_dir=store.backend.location,
        note_count=note_count,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
