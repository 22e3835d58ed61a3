"""
NoteCache Backend — In-Memory Storage Backend
===============================================

What:  Keeps notes in a plain dict.
Why:   Lets NoteStore be tested without touching the file system.
"""

from typing import Dict, List, Optional

from notecache.exceptions import NoteAlreadyExistsError, NoteNotFoundError
from notecache.services.storage_base import NoteBackend


class InMemoryBackend(NoteBackend):
    """Dict-backed backend; insertion order is the enumeration order."""

    location = "memory"

    def __init__(self, notes: Optional[Dict[str, str]] = None):
        self._notes: Dict[str, str] = dict(notes or {})

    async def exists(self, name: str) -> bool:
        return name in self._notes

    async def read(self, name: str) -> str:
        try:
            return self._notes[name]
        except KeyError:
            raise NoteNotFoundError(name)

    async def write(self, name: str, text: str, *, exclusive: bool = False) -> None:
        if exclusive and name in self._notes:
            raise NoteAlreadyExistsError(name)
        self._notes[name] = text

    async def delete(self, name: str) -> None:
        try:
            del self._notes[name]
        except KeyError:
            raise NoteNotFoundError(name)

    async def names(self) -> List[str]:
        return list(self._notes)
