"""
NoteSync: Transport Client
==========================

What:  Async HTTP client for the notes API, one coroutine per operation.
How:   httpx.AsyncClient against `<base_url>/notes`. Each call makes exactly
       one attempt; the decoded Note (or list of Notes) is returned, and any
       other outcome is raised as a TransportError subclass.
Who:   Used by NoteSyncController; usable on its own from scripts.
Why:   Typed errors let the controller tell "note already gone" (prune it)
       apart from "server broke" (keep it and say so) without looking at
       status codes itself.

Alternative considered:
    Retrying with tenacity, as the LLM client of a larger app would. A retried
    POST could create the same note twice, so every call is a single attempt
    and the user decides whether to try again.

Status mapping:
    2xx with the expected payload → value
    2xx with another payload      → MalformedResponseError
    400                           → RequestRejectedError (server's "error" text)
    404                           → RemoteNotFoundError
    any other non-2xx             → ServerFaultError
    no response at all            → TransportError
"""

import logging
from typing import Any, List, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from notesync.config import settings
from notesync.exceptions import (
    MalformedResponseError,
    RemoteNotFoundError,
    RequestRejectedError,
    ServerFaultError,
    TransportError,
)
from notesync.schemas.note import NOTE_LIST_ADAPTER, Note

logger = logging.getLogger(__name__)


class NoteTransport:
    """
    Thin async wrapper over the notes endpoints.

    Args:
        base_url: API root, e.g. "http://localhost:3001/api". Defaults to
                  settings.api_base_url.
        client:   Pre-built httpx.AsyncClient (tests pass one wired to an
                  ASGITransport or MockTransport). When given, its base_url
                  is used as-is and the transport does not close it.
        timeout:  Per-request timeout in seconds; None waits indefinitely.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ):
        self._owns_client = client is None
        if client is None:
            client = httpx.AsyncClient(
                base_url=(base_url or settings.api_base_url).rstrip("/"),
                timeout=timeout if timeout is not None else settings.client_timeout,
            )
        self._client = client

    async def __aenter__(self) -> "NoteTransport":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # ── Operations ────────────────────────────────────────────────────────

    async def get_all(self) -> List[Note]:
        """GET /notes → list of notes; anything but a JSON array of notes is malformed."""
        payload = await self._request("GET", "/notes")
        try:
            return NOTE_LIST_ADAPTER.validate_python(payload)
        except PydanticValidationError as e:
            raise MalformedResponseError(
                message="Server returned an invalid notes collection",
                context={"payload_type": type(payload).__name__, "errors": e.error_count()},
            ) from e

    async def get(self, note_id: int) -> Note:
        return self._decode_note(await self._request("GET", f"/notes/{note_id}"))

    async def create(self, content: str, important: bool = False) -> Note:
        """POST /notes. Only content and importance travel; the server picks the id."""
        payload = await self._request(
            "POST", "/notes", json={"content": content, "important": important}
        )
        return self._decode_note(payload)

    async def update(self, note_id: int, note: Note) -> Note:
        """PUT /notes/{id} with the full note."""
        payload = await self._request("PUT", f"/notes/{note_id}", json=note.model_dump())
        return self._decode_note(payload)

    async def delete(self, note_id: int) -> None:
        await self._request("DELETE", f"/notes/{note_id}")

    # ── Internals ─────────────────────────────────────────────────────────

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        """
        Perform one request and return the decoded JSON body (None when empty).

        Raises:
            TransportError and subclasses, see module docstring.
        """
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed before a response: %s", method, path, e)
            raise TransportError(
                message="Could not reach the note server",
                context={"method": method, "path": path, "error_type": type(e).__name__},
            ) from e

        status = response.status_code
        if response.is_success:
            if not response.content:
                return None
            try:
                return response.json()
            except ValueError as e:
                raise MalformedResponseError(
                    message="Server returned a body that is not JSON",
                    status_code=status,
                    context={"method": method, "path": path},
                ) from e

        context = {"method": method, "path": path}
        if status == 400:
            raise RequestRejectedError(
                message=self._error_text(response) or "Request rejected",
                status_code=status,
                context=context,
            )
        if status == 404:
            raise RemoteNotFoundError(
                message=f"Nothing found at {path}", status_code=status, context=context
            )
        logger.warning("%s %s answered %d", method, path, status)
        raise ServerFaultError(
            message=self._error_text(response) or f"Server answered {status}",
            status_code=status,
            context=context,
        )

    @staticmethod
    def _error_text(response: httpx.Response) -> Optional[str]:
        try:
            body = response.json()
        except ValueError:
            return None
        if isinstance(body, dict) and isinstance(body.get("error"), str):
            return body["error"]
        return None

    @staticmethod
    def _decode_note(payload: Any) -> Note:
        try:
            return Note.model_validate(payload)
        except PydanticValidationError as e:
            raise MalformedResponseError(
                message="Server returned an invalid note",
                context={"payload_type": type(payload).__name__},
            ) from e
