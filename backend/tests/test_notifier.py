"""
NoteSync: Notifier Tests
========================

What:  The transient notification clears itself, and a newer message resets
       the timer instead of stacking clears.
"""

import asyncio

import pytest

from notesync.client.notifier import Notifier


class TestNotifier:

    @pytest.mark.asyncio
    async def test_message_clears_after_timeout(self):
        notifier = Notifier(timeout=0.05)

        notifier.show("boom")
        assert notifier.message == "boom"
        assert notifier.pending

        await asyncio.sleep(0.1)

        assert notifier.message is None
        assert not notifier.pending

    @pytest.mark.asyncio
    async def test_new_message_resets_timer(self):
        notifier = Notifier(timeout=0.1)

        notifier.show("first")
        await asyncio.sleep(0.07)
        notifier.show("second")
        await asyncio.sleep(0.07)

        # 0.14s after the first message, but only 0.07s after the second
        assert notifier.message == "second"

        await asyncio.sleep(0.06)
        assert notifier.message is None

    @pytest.mark.asyncio
    async def test_listeners_see_show_and_clear(self):
        notifier = Notifier(timeout=0.02)
        seen = []
        notifier.subscribe(seen.append)

        notifier.show("hello")
        await asyncio.sleep(0.05)

        assert seen == ["hello", None]

    @pytest.mark.asyncio
    async def test_manual_clear_cancels_timer(self):
        notifier = Notifier(timeout=10)
        seen = []
        unsubscribe = notifier.subscribe(seen.append)

        notifier.show("hello")
        notifier.clear()
        unsubscribe()
        notifier.show("unseen")
        notifier.clear()

        assert seen == ["hello", None]
        assert not notifier.pending

    def test_default_timeout_from_settings(self):
        assert Notifier().timeout == 5.0
