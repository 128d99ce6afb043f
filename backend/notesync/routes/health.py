"""
NoteSync: Health Check Route
============================

What:  Liveness endpoint for monitoring and container probes.
How:   The store lives in process memory, so "healthy" only means the process
       answers; the payload adds the current note count and uptime.
"""

import logging
import time

from fastapi import APIRouter, Depends

from notesync import __version__
from notesync.schemas.note import HealthResponse
from notesync.services.note_store import NoteStore, get_note_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(store: NoteStore = Depends(get_note_store)) -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=__version__,
        note_count=len(store),
        uptime_seconds=round(time.time() - _start_time, 2),
    )
