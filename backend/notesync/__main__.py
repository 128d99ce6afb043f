"""Run the NoteSync server: `python -m notesync` (or the `notesync` console script)."""

import uvicorn

from notesync.config import settings


def run() -> None:
    # Single worker: the note store lives in this process's memory
    uvicorn.run(
        "notesync.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        workers=1,
    )


if __name__ == "__main__":
    run()
