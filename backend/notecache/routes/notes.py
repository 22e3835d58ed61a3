"""
NoteCache Backend — Notes Route Handlers
==========================================

What:  Handles GET /notes (list) and GET/PUT/DELETE /notes/{name}.
Why:   The read, replace and remove half of the note CRUD surface.
How:   Extracts the path parameter and body, delegates to NoteStore, returns
       plain text (or JSON for the list).
Who:   Called by API clients and the interactive docs at /docs.

Error responses (handled by global exception handlers):
    HTTP 404: Note does not exist (NoteNotFoundError)
    HTTP 400: Unsafe name or non-UTF-8 body
    HTTP 500: Disk failure (StorageError)
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from notecache.dependencies import get_note_store
from notecache.exceptions import InvalidNoteContentError
from notecache.schemas.note import NoteItem
from notecache.services.note_service import NoteStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notes"])

_NOT_FOUND = {404: {"description": "Note not found", "content": {"text/plain": {}}}}

# PUT takes the raw body as note text, so describe it by hand for OpenAPI
_TEXT_BODY = {
    "requestBody": {
        "required": True,
        "content": {"text/plain": {"schema": {"type": "string"}}},
    }
}


@router.get(
    "/notes",
    response_model=List[NoteItem],
    summary="List all notes",
    description=(
        "Returns every stored note with its full text. Order follows the "
        "cache directory enumeration and is not sorted."
    ),
)
async def list_notes(store: NoteStore = Depends(get_note_store)) -> List[NoteItem]:
    notes = await store.list_all()
    logger.debug("Listed %d notes", len(notes))
    return notes


@router.get(
    "/notes/{name}",
    response_class=PlainTextResponse,
    responses={
        200: {"description": "Note content", "content": {"text/plain": {}}},
        **_NOT_FOUND,
    },
    summary="Get a note by name",
)
async def get_note(
    name: str,
    store: NoteStore = Depends(get_note_store),
) -> PlainTextResponse:
    """Return the note body verbatim as text/plain."""
    text = await store.read(name)
    return PlainTextResponse(text)


@router.put(
    "/notes/{name}",
    response_class=PlainTextResponse,
    responses={200: {"description": "Note updated"}, **_NOT_FOUND},
    openapi_extra=_TEXT_BODY,
    summary="Replace a note's text",
)
async def update_note(
    name: str,
    request: Request,
    store: NoteStore = Depends(get_note_store),
) -> PlainTextResponse:
    """
    Replace the note's content with the raw request body.

    Why read the raw body:
        The new content is sent as-is (text/plain), not wrapped in JSON or a
        form, so FastAPI's body parsing does not apply. Any content type is
        accepted as long as the bytes decode as UTF-8.
    """
    body = await request.body()
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidNoteContentError(context={"name": name, "error": str(e)})

    await store.update(name, text)
    return PlainTextResponse("Note updated")


@router.delete(
    "/notes/{name}",
    response_class=PlainTextResponse,
    responses={200: {"description": "Note deleted"}, **_NOT_FOUND},
    summary="Delete a note",
)
async def delete_note(
    name: str,
    store: NoteStore = Depends(get_note_store),
) -> PlainTextResponse:
    await store.delete(name)
    return PlainTextResponse("Note deleted")
