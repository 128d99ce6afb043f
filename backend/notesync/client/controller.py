"""
NoteSync: Synchronization Controller
====================================

What:  Owns the client's local view of the notes and keeps it consistent with
       the server across load, create, importance toggle and delete.
How:   Pessimistic apply. Nothing touches `notes` until the round trip
       completes; the server's answer is then merged into the list as it is
       at that moment, keyed by note id. Failures become one transient
       notification each, and a 404 on a known note prunes it locally.
Who:   Driven by a presentation layer (any renderer) through the intent
       methods; the renderer reads `notes_to_show`, `pending`, `new_note`,
       `show_all` and `notification.message`, and re-renders from
       `subscribe()`.
Why:   Pessimistic apply keeps `notes` equal to something the server has
       acknowledged, so a failure never needs a rollback. `pending` lets a
       renderer still show a submitted note greyed out while it is in flight.

Ordering:
    Round trips are neither queued nor serialized. Two toggles on different
    notes may resolve in either order; each merge only replaces the record
    with its own id, so a late answer cannot undo an unrelated change.
"""

import logging
import random
from typing import Callable, List, Optional

from notesync.client.notifier import Notifier
from notesync.client.transport import NoteTransport
from notesync.exceptions import MalformedResponseError, RemoteNotFoundError, TransportError
from notesync.schemas.note import Note

logger = logging.getLogger(__name__)

Listener = Callable[["NoteSyncController"], None]


class NoteSyncController:
    """
    Client-side state holder and reconciler.

    Args:
        transport: NoteTransport (or anything with the same coroutines).
        notifier:  Notification slot; a fresh Notifier by default.
        coin:      Returns a float in [0, 1); decides importance of new
                   notes submitted without an explicit flag.
    """

    def __init__(
        self,
        transport: NoteTransport,
        notifier: Optional[Notifier] = None,
        coin: Callable[[], float] = random.random,
    ):
        self.transport = transport
        self.notification = notifier or Notifier()
        self.notes: List[Note] = []
        self.new_note = ""
        self.show_all = True
        self.pending: List[Note] = []
        self._coin = coin
        self._listeners: List[Listener] = []

    # ── View state ────────────────────────────────────────────────────────

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call `listener(controller)` after every state change."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    @property
    def notes_to_show(self) -> List[Note]:
        if self.show_all:
            return list(self.notes)
        return [note for note in self.notes if note.important]

    def find(self, note_id: int) -> Optional[Note]:
        return next((note for note in self.notes if note.id == note_id), None)

    def set_new_note(self, text: str) -> None:
        self.new_note = text
        self._changed()

    def toggle_show_all(self) -> None:
        self.show_all = not self.show_all
        self._changed()

    # ── Round trips ───────────────────────────────────────────────────────

    async def load(self) -> List[Note]:
        """
        Replace the local list with the server's collection.

        A malformed payload empties the list; any other failure leaves it as
        it was. Both surface "Failed to load notes".
        """
        try:
            notes = await self.transport.get_all()
        except MalformedResponseError as e:
            logger.error("Server returned an invalid notes collection: %s %s", e.message, e.context)
            self.notes = []
            self._fail("Failed to load notes")
            return self.notes
        except TransportError as e:
            logger.error("Failed to load notes: %s", e.message)
            self._fail("Failed to load notes")
            return self.notes

        self.notes = list(notes)
        logger.debug("Loaded %d notes", len(self.notes))
        self._changed()
        return self.notes

    async def create(
        self, content: Optional[str] = None, important: Optional[bool] = None
    ) -> Optional[Note]:
        """
        Submit a new note; `content` defaults to the pending input buffer.

        Empty content is ignored without a request. While the request is in
        flight the note sits in `pending` under a placeholder id. On success
        the server's note (with its id) is appended and the input buffer
        cleared; on failure the list is untouched.
        """
        text = self.new_note if content is None else content
        if not text:
            logger.debug("Ignoring empty note submission")
            return None

        if important is None:
            important = self._coin() < 0.5
        # Placeholder id; never sent, replaced by the server's
        provisional = Note(id=len(self.notes) + 1, content=text, important=important)
        self.pending.append(provisional)
        self._changed()

        try:
            created = await self.transport.create(provisional.content, provisional.important)
        except TransportError as e:
            logger.error("Failed to add note: %s", e.message)
            self.pending.remove(provisional)
            self._fail("Failed to add note")
            return None

        self.pending.remove(provisional)

        # A load that finished meanwhile may already hold the new id
        self.notes = [note for note in self.notes if note.id != created.id] + [created]
        self.new_note = ""
        self._changed()
        return created

    async def toggle_importance(self, note_id: int) -> Optional[Note]:
        """
        Flip `important` on the server, then adopt the server's version.

        A 404 means the note is gone: it is pruned and the user is told so.
        Other failures keep the note and report a failed update.
        """
        note = self.find(note_id)
        if note is None:
            logger.warning("Toggle requested for note %s which is not in the local list", note_id)
            return None

        changed = note.model_copy(update={"important": not note.important})

        try:
            returned = await self.transport.update(note_id, changed)
        except RemoteNotFoundError:
            self.notes = [n for n in self.notes if n.id != note_id]
            self._fail(f"Note '{note.content}' was already removed from server")
            return None
        except TransportError as e:
            logger.error("Failed to update note %s: %s", note_id, e.message)
            self._fail(f"Failed to update note '{note.content}'")
            return None

        self.notes = [returned if n.id == note_id else n for n in self.notes]
        self._changed()
        return returned

    async def delete(self, note_id: int) -> bool:
        """Delete on the server, then drop locally. Unknown ids count as deleted."""
        try:
            await self.transport.delete(note_id)
        except RemoteNotFoundError:
            pass
        except TransportError as e:
            logger.error("Failed to delete note %s: %s", note_id, e.message)
            self._fail("Failed to delete note")
            return False

        self.notes = [n for n in self.notes if n.id != note_id]
        self._changed()
        return True

    # ── Internals ─────────────────────────────────────────────────────────

    def _fail(self, message: str) -> None:
        self.notification.show(message)
        self._changed()

    def _changed(self) -> None:
        for listener in list(self._listeners):
            listener(self)
