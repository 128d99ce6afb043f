"""
NoteSync: Transient Notification
================================

What:  Holds the one error message the client shows, and clears it on its own.
How:   show() schedules clear() with loop.call_later; a newer message cancels
       the pending handle before scheduling its own, so there is at most one
       timer alive and the latest message always gets the full lifetime.
Why:   A handle from call_later can be cancelled synchronously; a background
       task sleeping for the lifetime would need awaiting on cancellation
       and outlive the message it was clearing.
"""

import asyncio
import logging
from typing import Callable, List, Optional

from notesync.config import settings

logger = logging.getLogger(__name__)

Listener = Callable[[Optional[str]], None]


class Notifier:
    """
    Self-clearing notification slot.

    Attributes:
        message: Currently displayed text, or None.
        timeout: Seconds a message stays up (settings.notification_timeout).
    """

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = settings.notification_timeout if timeout is None else timeout
        self.message: Optional[str] = None
        self._handle: Optional[asyncio.TimerHandle] = None
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call `listener(message)` on every change; returns an unsubscribe function."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    @property
    def pending(self) -> bool:
        """True while a clear is scheduled."""
        return self._handle is not None

    def show(self, message: str) -> None:
        """Display `message` and (re)start the clear timer. Needs a running loop."""
        self._cancel_timer()
        self.message = message
        logger.info("Notification: %s", message)
        self._handle = asyncio.get_running_loop().call_later(self.timeout, self._expire)
        self._emit()

    def clear(self) -> None:
        self._cancel_timer()
        if self.message is not None:
            self.message = None
            self._emit()

    def _expire(self) -> None:
        self._handle = None
        self.clear()

    def _cancel_timer(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _emit(self) -> None:
        for listener in list(self._listeners):
            listener(self.message)
