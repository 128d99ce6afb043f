"""
NoteSync: Transport Client Tests
================================

What:  Tests for NoteTransport against the real app (in-process) and against
       httpx.MockTransport for responses the app never produces.

What we test:
    ✅ Each operation decodes the server's answer into Note values
    ✅ Only content + importance are sent on create
    ✅ 400 / 404 / 5xx / network failures map to typed errors
    ✅ Non-array and non-JSON payloads raise MalformedResponseError
    ✅ One attempt per call (no retries)
"""

import json

import httpx
import pytest

from notesync.client.transport import NoteTransport
from notesync.exceptions import (
    MalformedResponseError,
    RemoteNotFoundError,
    RequestRejectedError,
    ServerFaultError,
    TransportError,
)
from notesync.schemas.note import Note


def mock_transport(handler):
    """NoteTransport whose requests are answered by `handler(request)`."""
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://test/api")
    return NoteTransport(client=client)


class TestTransportAgainstApp:

    @pytest.mark.asyncio
    async def test_get_all(self, transport):
        notes = await transport.get_all()

        assert len(notes) == 3
        assert all(isinstance(n, Note) for n in notes)
        assert notes[0] == Note(id=1, content="HTML is easy", important=True)

    @pytest.mark.asyncio
    async def test_get_single(self, transport):
        note = await transport.get(3)
        assert note.important is True

    @pytest.mark.asyncio
    async def test_create(self, transport, store):
        note = await transport.create("new", important=False)

        assert note == Note(id=4, content="new", important=False)
        assert store.get_note(4) == note

    @pytest.mark.asyncio
    async def test_create_empty_is_rejected(self, transport):
        with pytest.raises(RequestRejectedError) as exc_info:
            await transport.create("")

        assert exc_info.value.message == "content missing"
        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_update(self, transport):
        note = await transport.update(2, Note(id=2, content="Browser can execute only JavaScript", important=True))
        assert note.important is True

    @pytest.mark.asyncio
    async def test_update_missing_note(self, transport, store):
        store.delete_note(2)

        with pytest.raises(RemoteNotFoundError) as exc_info:
            await transport.update(2, Note(id=2, content="gone", important=True))

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(self, transport, store):
        assert await transport.delete(1) is None
        assert await transport.delete(1) is None
        assert len(store) == 2


class TestTransportFailures:

    @pytest.mark.asyncio
    async def test_create_sends_only_content_and_importance(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"id": 10, "content": "x", "important": True})

        async with mock_transport(handler) as transport:
            await transport.create("x", important=True)

        assert seen[0].url.path == "/api/notes"
        assert seen[0].method == "POST"
        assert json.loads(seen[0].content) == {"content": "x", "important": True}

    @pytest.mark.asyncio
    async def test_non_array_collection_is_malformed(self):
        transport = mock_transport(lambda request: httpx.Response(200, json={"notes": []}))

        with pytest.raises(MalformedResponseError):
            await transport.get_all()

    @pytest.mark.asyncio
    async def test_html_instead_of_json_is_malformed(self):
        transport = mock_transport(lambda request: httpx.Response(200, text="<html></html>"))

        with pytest.raises(MalformedResponseError):
            await transport.get_all()

    @pytest.mark.asyncio
    async def test_invalid_note_is_malformed(self):
        transport = mock_transport(lambda request: httpx.Response(200, json={"content": "no id"}))

        with pytest.raises(MalformedResponseError):
            await transport.get(1)

    @pytest.mark.asyncio
    async def test_server_fault(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(500, json={"error": "Internal Server Error"})

        transport = mock_transport(handler)
        with pytest.raises(ServerFaultError) as exc_info:
            await transport.get_all()

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Internal Server Error"
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_network_failure(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        transport = mock_transport(handler)
        with pytest.raises(TransportError) as exc_info:
            await transport.get_all()

        assert type(exc_info.value) is TransportError
        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_owned_client_uses_base_url(self):
        transport = NoteTransport(base_url="http://localhost:3001/api/")
        try:
            assert str(transport._client.base_url) == "http://localhost:3001/api/"
        finally:
            await transport.aclose()
