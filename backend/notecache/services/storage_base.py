"""
NoteCache Backend — Abstract Storage Backend Interface
========================================================

What:  Abstract base class defining the raw I/O contract the note store uses.
Why:   The existence-gated create/update/delete rules live in NoteStore and
       must hold no matter where the text is kept. Backends only move text.
How:   Concrete implementations inherit from NoteBackend and implement the
       five primitives: exists, read, write, delete, names.
Who:   Called by NoteStore; constructed by the application factory.

Implementations:
    - FileSystemBackend: one <name>.txt file per note in the cache directory
    - InMemoryBackend:   a dict, used by unit tests
"""

from abc import ABC, abstractmethod
from typing import List


class NoteBackend(ABC):
    """
    Abstract interface for name-addressed text storage.

    Contract:
        - Names arrive already validated by NoteStore.
        - read() and delete() raise NoteNotFoundError for absent names,
          even if exists() said otherwise a moment earlier.
        - write(..., exclusive=True) raises NoteAlreadyExistsError instead
          of overwriting; exclusive=False replaces the full content.
        - Any other I/O failure is wrapped in StorageError.
    """

    #: Human-readable location, shown in logs and the health check.
    location: str = ""

    def check(self) -> None:
        """
        Verify the backend is usable before the service accepts requests.

        Raises:
            ConfigurationError: The backing location does not exist.
        """

    @abstractmethod
    async def exists(self, name: str) -> bool:
        """Return True if a note called `name` is currently stored."""
        ...

    @abstractmethod
    async def read(self, name: str) -> str:
        """Return the full text of note `name`."""
        ...

    @abstractmethod
    async def write(self, name: str, text: str, *, exclusive: bool = False) -> None:
        """
        Store `text` as the full content of note `name`.

        Args:
            exclusive: Fail with NoteAlreadyExistsError if the note exists,
                       as one atomic step.
        """
        ...

    @abstractmethod
    async def delete(self, name: str) -> None:
        """Remove note `name` permanently."""
        ...

    @abstractmethod
    async def names(self) -> List[str]:
        """
        Enumerate the names of all stored notes.

        Order follows the underlying enumeration and is not guaranteed.
        """
        ...
