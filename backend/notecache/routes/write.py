"""
NoteCache Backend — Write Route Handler
=========================================

What:  Handles POST /write for creating a new note from form fields.
Why:   Entry point used by the upload form at /UploadForm.html.
How:   Receives `note_name` and `note` as form fields (urlencoded or
       multipart), delegates to NoteStore.create(), returns 201.

Request Flow:
    1. Browser submits the upload form (or a client posts form data)
    2. FastAPI extracts the two fields (python-multipart does the parsing)
    3. NoteStore refuses the write if the name is taken
    4. Return 201 "Note created"

Why `note` defaults to "":
    Empty notes are allowed. FastAPI treats an empty form value as missing,
    so a required field would turn an empty note into a 400.
"""

import logging

from fastapi import APIRouter, Depends, Form
from fastapi.responses import PlainTextResponse

from notecache.dependencies import get_note_store
from notecache.services.note_service import NoteStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notes"])


@router.post(
    "/write",
    status_code=201,
    response_class=PlainTextResponse,
    responses={
        201: {"description": "Note created"},
        400: {"description": "Note already exists, or invalid name", "content": {"text/plain": {}}},
    },
    summary="Create a new note",
)
async def write_note(
    note_name: str = Form(..., description="Name of the new note"),
    note: str = Form(default="", description="Note text"),
    store: NoteStore = Depends(get_note_store),
) -> PlainTextResponse:
    logger.info("Received write request: note_name=%s, size=%d chars", note_name, len(note))
    await store.create(note_name, note)
    return PlainTextResponse("Note created", status_code=201)
