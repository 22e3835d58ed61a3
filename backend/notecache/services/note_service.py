"""
NoteCache Backend — Note Store (Business Logic)
=================================================

What:  Existence-gated create/read/update/delete/list over a storage backend.
Why:   Keeps the "exists or not" rules in one place, independent of HTTP and
       of where the text is actually kept.
How:   Validates the name, takes the per-name lock, checks existence, then
       performs exactly one backend call.
Who:   Called by route handlers; calls a NoteBackend.

Note lifecycle (per name):
    Absent ──create──▶ Present ──update──▶ Present
                          │
                          └──delete──▶ Absent

    create on Present and read/update/delete on Absent are rejected
    (NoteAlreadyExistsError / NoteNotFoundError), never treated as transitions.

Concurrency:
    Requests run concurrently on one event loop. The existence check and the
    action that follows it are made atomic per name with NameLocks, so two
    simultaneous creates of "foo" yield one 201 and one 400. Different names
    never wait on each other. The file backend's exclusive create covers
    other processes sharing the same cache directory.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, List

from notecache.exceptions import (
    InvalidNoteNameError,
    NoteAlreadyExistsError,
    NoteNotFoundError,
)
from notecache.schemas.note import NoteItem
from notecache.services.storage_base import NoteBackend

logger = logging.getLogger(__name__)

# Characters that would let a name escape the flat cache directory
_FORBIDDEN_CHARS = ("/", "\\", "\x00")

# Common 255-byte file name limit, minus the ".txt" suffix
MAX_NAME_BYTES = 251


def validate_note_name(name: str) -> str:
    """
    Reject names that cannot be mapped to a single file inside the cache.

    Rejected:
        - empty string
        - "." and ".." (directory references)
        - anything containing "/", "\\" or NUL
        - names longer than MAX_NAME_BYTES once UTF-8 encoded

    Everything else, including spaces, dots and unicode, is used verbatim.

    Returns:
        The name unchanged.
    Raises:
        InvalidNoteNameError
    """
    if not name:
        raise InvalidNoteNameError(name, reason="name must not be empty")
    if name in (".", ".."):
        raise InvalidNoteNameError(name, reason="name must not be '.' or '..'")
    if any(ch in name for ch in _FORBIDDEN_CHARS):
        raise InvalidNoteNameError(
            name, reason="name must not contain path separators or NUL"
        )
    if len(name.encode("utf-8", "surrogatepass")) > MAX_NAME_BYTES:
        raise InvalidNoteNameError(
            name, reason=f"name must be at most {MAX_NAME_BYTES} bytes"
        )
    return name


class NameLocks:
    """
    Registry of asyncio locks keyed by note name.

    Locks are created on first use and dropped once nobody holds or waits
    for them, so the registry only ever contains names with work in flight.
    """

    def __init__(self):
        self._locks: Dict[str, asyncio.Lock] = {}
        self._users: Dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._locks)

    @asynccontextmanager
    async def hold(self, name: str) -> AsyncIterator[None]:
        lock = self._locks.get(name)
        if lock is None:
            lock = self._locks[name] = asyncio.Lock()
        self._users[name] = self._users.get(name, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[name] -= 1
            if not self._users[name]:
                del self._users[name]
                del self._locks[name]


class NoteStore:
    """
    Name-addressed storage for text notes.

    Responsibilities:
        - create(): write a new note, refusing to overwrite
        - read():   return a note's full text
        - update(): replace a note's full text (no patching, no append)
        - delete(): remove a note permanently
        - list_all(): snapshot of every stored note

    Error Handling Strategy:
        NoteAlreadyExistsError / NoteNotFoundError / InvalidNoteNameError are
        raised here; StorageError comes straight from the backend. Nothing is
        retried and nothing is caught: every failure reaches the route's
        global exception handler unchanged.
    """

    def __init__(self, backend: NoteBackend):
        self.backend = backend
        self.locks = NameLocks()

    def check(self) -> None:
        """Fail with ConfigurationError if the backend location is missing."""
        self.backend.check()

    async def create(self, name: str, text: str) -> None:
        """
        Create note `name` with content `text`.

        Raises:
            NoteAlreadyExistsError: A note with this name is already stored.
        """
        validate_note_name(name)
        async with self.locks.hold(name):
            if await self.backend.exists(name):
                logger.info("Create rejected, note exists: %s", name)
                raise NoteAlreadyExistsError(name)
            await self.backend.write(name, text, exclusive=True)
        logger.info("Note created: %s (%d chars)", name, len(text))

    async def read(self, name: str) -> str:
        """
        Return the full text of note `name`.

        Raises:
            NoteNotFoundError: No note with this name is stored.
        """
        validate_note_name(name)
        async with self.locks.hold(name):
            if not await self.backend.exists(name):
                raise NoteNotFoundError(name)
            return await self.backend.read(name)

    async def update(self, name: str, text: str) -> None:
        """
        Replace the full content of note `name` with `text`.

        Raises:
            NoteNotFoundError: No note with this name is stored. Update never
                creates a note implicitly.
        """
        validate_note_name(name)
        async with self.locks.hold(name):
            if not await self.backend.exists(name):
                logger.info("Update rejected, note missing: %s", name)
                raise NoteNotFoundError(name)
            await self.backend.write(name, text)
        logger.info("Note updated: %s (%d chars)", name, len(text))

    async def delete(self, name: str) -> None:
        """
        Remove note `name`. Not idempotent: a second delete raises.

        Raises:
            NoteNotFoundError: No note with this name is stored.
        """
        validate_note_name(name)
        async with self.locks.hold(name):
            if not await self.backend.exists(name):
                logger.info("Delete rejected, note missing: %s", name)
                raise NoteNotFoundError(name)
            await self.backend.delete(name)
        logger.info("Note deleted: %s", name)

    async def list_all(self) -> List[NoteItem]:
        """
        Return every stored note with its full text.

        What:    One enumeration followed by one read per note.
        Order:   Whatever the backend enumerates; callers must not rely on it.
        Consistency:
            A snapshot, not a transaction. A note deleted between the
            enumeration and its read is left out of the result.
        """
        notes = []
        for name in await self.backend.names():
            try:
                text = await self.backend.read(name)
            except NoteNotFoundError:
                logger.debug("Note vanished during listing: %s", name)
                continue
            notes.append(NoteItem(name=name, text=text))
        return notes
