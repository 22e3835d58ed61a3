"""
NoteCache Backend — FastAPI Dependencies
==========================================

What:  Request-scoped accessors for objects built by the application factory.
Why:   Routes receive the NoteStore through Depends() instead of importing a
       global, so each app instance (and each test) has its own cache directory.
How:   create_app() stores the store on `app.state`; the dependency reads
       it back from the incoming request.
"""

from fastapi import Request

from notecache.services.note_service import NoteStore


def get_note_store(request: Request) -> NoteStore:
    """Return the NoteStore bound to the running application."""
    return request.app.state.note_store
