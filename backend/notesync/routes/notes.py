"""
NoteSync: Notes Route Handlers
==============================

What:  The notes REST surface: list, get, create, update, delete.
How:   Extracts path/body data, delegates to NoteStore, returns JSON.
Who:   Called by the client transport (notesync.client.transport).
Why:   Handlers stay thin: the store owns every rule, and the exception
       handlers in main.py own every error body.

Endpoints (mounted under settings.api_prefix, default /api):
    GET        /notes        → 200 array of Note
    GET        /notes/{id}   → 200 Note | 404 empty body
    POST       /notes        → 200 created Note | 400 {"error": "content missing"}
    PUT/PATCH  /notes/{id}   → 200 updated Note | 404 empty body
    DELETE     /notes/{id}   → 204 empty body, whether or not the note existed
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Response, status

from notesync.middleware.request_id import request_id_var
from notesync.schemas.note import ErrorResponse, Note, NoteCreate, NoteUpdate
from notesync.services.note_store import NoteStore, get_note_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notes"])

NOT_FOUND_RESPONSE = {404: {"description": "Note not found (empty body)"}}


@router.get(
    "/notes",
    response_model=List[Note],
    summary="List all notes",
)
async def list_notes(store: NoteStore = Depends(get_note_store)) -> List[Note]:
    """Returns the whole collection in creation order."""
    return store.list_notes()


@router.get(
    "/notes/{note_id}",
    response_model=Note,
    responses=NOT_FOUND_RESPONSE,
    summary="Get a single note by ID",
)
async def get_note(note_id: int, store: NoteStore = Depends(get_note_store)) -> Note:
    return store.get_note(note_id)


@router.post(
    "/notes",
    response_model=Note,
    responses={400: {"description": "Content missing", "model": ErrorResponse}},
    summary="Create a note",
    description=(
        "Creates a note from `content` (required) and `important` (optional, default false). "
        "The server assigns the id as one more than the current maximum."
    ),
)
async def create_note(
    payload: Optional[NoteCreate] = Body(default=None),
    store: NoteStore = Depends(get_note_store),
) -> Note:
    note = store.create_note(payload)
    logger.debug("[%s] created note %d", request_id_var.get(""), note.id)
    return note


@router.api_route(
    "/notes/{note_id}",
    methods=["PUT", "PATCH"],
    response_model=Note,
    responses={**NOT_FOUND_RESPONSE, 400: {"description": "Empty content", "model": ErrorResponse}},
    summary="Update a note",
    description=(
        "Replaces `content` and/or `important` of an existing note. "
        "A body `id` is ignored; the path id is authoritative."
    ),
)
async def update_note(
    note_id: int,
    payload: Optional[NoteUpdate] = Body(default=None),
    store: NoteStore = Depends(get_note_store),
) -> Note:
    return store.update_note(note_id, payload)


@router.delete(
    "/notes/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a note (idempotent)",
)
async def delete_note(note_id: int, store: NoteStore = Depends(get_note_store)) -> Response:
    store.delete_note(note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
