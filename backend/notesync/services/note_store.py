"""
NoteSync: Note Store (in-memory collection)
===========================================

What:  The server's single source of truth: a process-lifetime list of notes.
How:   A NoteStore object owns the list and is the only thing that mutates
       it. Every mutation builds a new list (append / filter / map) and swaps
       it in, so readers holding the previous list never observe a partial
       change.
Who:   Called by the notes route handlers through the `get_note_store`
       dependency.
When:  For every notes request; state is lost when the process exits.
Why:   One object owning the list keeps the id rule and the "content
       missing" rule in a single place, and tests swap in a fresh store
       through `app.dependency_overrides`.

Concurrency:
    Handlers run on the event loop and none of these methods awaits, so each
    call runs to completion before another request can touch the list. No
    lock is needed as long as the app is served by a single worker process.
"""

import logging
from typing import List, Optional

from notesync.exceptions import NotFoundError, ValidationError
from notesync.schemas.note import Note, NoteCreate, NoteUpdate

logger = logging.getLogger(__name__)

SEED_NOTES = (
    Note(id=1, content="HTML is easy", important=True),
    Note(id=2, content="Browser can execute only JavaScript", important=False),
    Note(id=3, content="GET and POST are the most important methods of HTTP protocol", important=True),
)


class NoteStore:
    """
    In-memory note collection with exclusive mutation methods.

    Responsibilities:
        - list_notes() / get_note(): reads
        - create_note(): content check, id assignment, append
        - update_note(): replace content / importance of an existing note
        - delete_note(): idempotent removal
        - reset(): restore the seed collection (startup and tests)
    """

    def __init__(self, notes: Optional[List[Note]] = None):
        self._notes: List[Note] = list(SEED_NOTES if notes is None else notes)

    def __len__(self) -> int:
        return len(self._notes)

    def reset(self, notes: Optional[List[Note]] = None) -> None:
        self._notes = list(SEED_NOTES if notes is None else notes)
        logger.info("Note store reset to %d notes", len(self._notes))

    def list_notes(self) -> List[Note]:
        """Returns a copy of the collection in insertion order."""
        return list(self._notes)

    def get_note(self, note_id: int) -> Note:
        """
        Raises:
            NotFoundError: no note carries `note_id` (→ 404)
        """
        for note in self._notes:
            if note.id == note_id:
                return note
        raise NotFoundError(resource="note", resource_id=note_id)

    def _generate_id(self) -> int:
        # 1 + current maximum, 1 for an empty store
        return max((note.id for note in self._notes), default=0) + 1

    def create_note(self, payload: Optional[NoteCreate]) -> Note:
        """
        Validate and append a new note.

        Args:
            payload: Parsed request body; None when the body was absent.

        Returns:
            The stored note, carrying its server-assigned id.

        Raises:
            ValidationError: content is absent or empty (→ 400 "content missing")
        """
        if payload is None or not payload.content:
            raise ValidationError(message="content missing", field="content")

        note = Note(
            id=self._generate_id(),
            content=payload.content,
            important=bool(payload.important),
        )
        self._notes = self._notes + [note]
        logger.info("Note %d created (important=%s)", note.id, note.important)
        return note

    def update_note(self, note_id: int, payload: Optional[NoteUpdate]) -> Note:
        """
        Replace fields of an existing note; omitted fields keep their value.

        Raises:
            NotFoundError: no note carries `note_id` (→ 404)
            ValidationError: content present but empty (→ 400)
        """
        current = self.get_note(note_id)
        changes = {}
        if payload is not None:
            if payload.content is not None:
                if not payload.content:
                    raise ValidationError(message="content missing", field="content")
                changes["content"] = payload.content
            if payload.important is not None:
                changes["important"] = payload.important

        updated = current.model_copy(update=changes)
        self._notes = [updated if note.id == note_id else note for note in self._notes]
        logger.info("Note %d updated: %s", note_id, sorted(changes))
        return updated

    def delete_note(self, note_id: int) -> None:
        """Removes the note if present. Deleting an unknown id is not an error."""
        remaining = [note for note in self._notes if note.id != note_id]
        if len(remaining) == len(self._notes):
            logger.debug("Delete of unknown note %d ignored", note_id)
        self._notes = remaining


note_store = NoteStore()


def get_note_store() -> NoteStore:
    """FastAPI dependency returning the process-wide store."""
    return note_store
