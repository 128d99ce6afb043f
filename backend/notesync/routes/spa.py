"""
NoteSync: Client Application Fallback Route
===========================================

What:  Serves the client build: existing static assets by path, and the
       entry document (index.html) for every other GET.
How:   A single catch-all route. main.py includes this router LAST so every
       API route and /health is matched before it.
Who:   Browsers loading the single-page client, including deep links.
Why:   The client routes on its own (e.g. /notes/5 in the address bar), so
       any unknown path has to load the entry document rather than 404.
"""

import logging
from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse

from notesync.config import settings
from notesync.exceptions import NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(include_in_schema=False)

ENTRY_DOCUMENT = "index.html"


def resolve_static_path(requested: str) -> Path:
    """
    Map a request path onto a file below settings.static_root.

    Returns the requested file when it exists inside the static root,
    otherwise the entry document.

    Raises:
        NotFoundError: the static root has no entry document
    """
    root = Path(settings.static_root).resolve()

    if requested:
        candidate = (root / requested).resolve()
        # Requests may not escape the static root (e.g. ../../etc/passwd)
        if root in candidate.parents and candidate.is_file():
            return candidate

    entry = root / ENTRY_DOCUMENT
    if not entry.is_file():
        logger.warning("No client entry document at %s", entry)
        raise NotFoundError(resource="file", resource_id=ENTRY_DOCUMENT)
    return entry


@router.get("/{full_path:path}")
async def serve_client(full_path: str) -> FileResponse:
    return FileResponse(path=str(resolve_static_path(full_path)))
