"""
NoteCache Backend — Upload Form Route
=======================================

What:  Serves the static HTML page at GET /UploadForm.html.
Why:   Lets a browser create notes without any client code; the page posts
       `note_name` and `note` to POST /write.
How:   FileResponse streams the page bundled in `notecache/static/`.
"""

from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse

router = APIRouter(tags=["Form"])

UPLOAD_FORM_PATH = Path(__file__).resolve().parent.parent / "static" / "UploadForm.html"


@router.get(
    "/UploadForm.html",
    response_class=FileResponse,
    summary="HTML form for creating notes",
)
async def upload_form() -> FileResponse:
    return FileResponse(UPLOAD_FORM_PATH, media_type="text/html")
