"""
NoteSync: Test Configuration (conftest.py)
==========================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── store:        Fresh NoteStore seeded with the three demo notes
    ├── test_client:  HTTPX AsyncClient talking to the app, wired to `store`
    ├── transport:    NoteTransport over the same in-process app
    └── controller:   NoteSyncController over `transport`, 50ms notifications
"""

import os

# Settings are read at import time; set them before importing the app
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["API_PREFIX"] = "/api"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from notesync.client.controller import NoteSyncController
from notesync.client.notifier import Notifier
from notesync.client.transport import NoteTransport
from notesync.services.note_store import NoteStore, get_note_store

NOTIFICATION_TIMEOUT = 0.05


@pytest.fixture
def store():
    """A fresh seeded store, installed as the app's store for the test."""
    from notesync.main import app

    fresh = NoteStore()
    app.dependency_overrides[get_note_store] = lambda: fresh
    yield fresh
    app.dependency_overrides.pop(get_note_store, None)


@pytest_asyncio.fixture
async def test_client(store):
    """
    HTTPX AsyncClient routed directly into the FastAPI app (no server).

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/api/notes")
    """
    from notesync.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def transport(store):
    """NoteTransport whose requests land in the in-process app."""
    from notesync.main import app
    client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test/api")
    async with client:
        yield NoteTransport(client=client)


@pytest_asyncio.fixture
async def controller(transport):
    return NoteSyncController(
        transport,
        notifier=Notifier(timeout=NOTIFICATION_TIMEOUT),
        coin=lambda: 0.9,  # unflagged notes come out not important
    )
