"""
NoteSync: Client Package
========================

What:  The client side of the wire: transport, notification slot, and the
       synchronization controller a presentation layer drives.

Typical use:
    async with NoteTransport("http://localhost:3001/api") as transport:
        controller = NoteSyncController(transport)
        await controller.load()
        await controller.create("buy milk", important=False)
"""

from notesync.client.controller import NoteSyncController
from notesync.client.notifier import Notifier
from notesync.client.transport import NoteTransport

__all__ = ["NoteSyncController", "Notifier", "NoteTransport"]
