"""
NoteCache Backend — File System Storage Backend
=================================================

What:  Stores each note as <cache>/<name>.txt, raw UTF-8 text, no header.
Why:   The cache directory IS the database; any file dropped there with a
       .txt suffix is a note, and deleting the file deletes the note.
How:   Async file I/O through aiofiles so a slow disk never blocks the event loop.
Who:   Created by the application factory from `Settings.cache`.

Directory Structure:
    cache/
    ├── groceries.txt
    ├── todo.txt
    └── meeting notes.txt

Error translation:
    FileNotFoundError  → NoteNotFoundError  (file vanished after the gate)
    FileExistsError    → NoteAlreadyExistsError (exclusive create lost a race)
    any other OSError  → StorageError (details kept in context for the log)
"""

import logging
from pathlib import Path
from typing import List

import aiofiles
import aiofiles.os

from notecache.exceptions import (
    ConfigurationError,
    NoteAlreadyExistsError,
    NoteNotFoundError,
    StorageError,
)
from notecache.services.storage_base import NoteBackend

logger = logging.getLogger(__name__)

# Suffix appended to every note name to build its file name
NOTE_SUFFIX = ".txt"


def _is_utf8_name(entry: str) -> bool:
    try:
        entry.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


class FileSystemBackend(NoteBackend):
    """
    Note storage rooted at a single flat directory.

    Text handling:
        Files are opened with newline="" so "\\r\\n" survives a round trip,
        and decoded with errors="replace" so a stray non-UTF-8 file dropped
        into the cache cannot break listing. Files whose *names* are not
        UTF-8 are left out of names() for the same reason.
    """

    def __init__(self, root: str):
        # Why no mkdir: a missing cache directory is a configuration error,
        # reported by check() at startup rather than silently created.
        self.root = Path(root)
        self.location = str(self.root)

    def check(self) -> None:
        if not self.root.is_dir():
            raise ConfigurationError(
                message=f"Cache directory '{self.root}' does not exist.",
                context={"cache": str(self.root)},
            )

    def path_for(self, name: str) -> Path:
        """Map a note name to its file: <root>/<name>.txt"""
        return self.root / f"{name}{NOTE_SUFFIX}"

    async def exists(self, name: str) -> bool:
        # Why isfile (not exists): a directory called "x.txt" is not a note
        return await aiofiles.os.path.isfile(self.path_for(name))

    async def read(self, name: str) -> str:
        path = self.path_for(name)
        try:
            async with aiofiles.open(
                path, "r", encoding="utf-8", errors="replace", newline=""
            ) as f:
                return await f.read()
        except FileNotFoundError:
            raise NoteNotFoundError(name)
        except OSError as e:
            logger.error("Failed to read note file %s: %s", path, str(e))
            raise StorageError(
                message="Failed to read note",
                context={"path": str(path), "os_error": str(e)},
            )

    async def write(self, name: str, text: str, *, exclusive: bool = False) -> None:
        path = self.path_for(name)
        # "x" fails atomically if the file exists, closing the check-then-create
        # window against other processes sharing the directory.
        mode = "x" if exclusive else "w"
        try:
            async with aiofiles.open(path, mode, encoding="utf-8", newline="") as f:
                await f.write(text)
        except FileExistsError:
            raise NoteAlreadyExistsError(name)
        except OSError as e:
            logger.error("Failed to write note file %s: %s", path, str(e))
            raise StorageError(
                message="Failed to save note",
                context={"path": str(path), "os_error": str(e)},
            )
        logger.debug("Wrote %s (%d chars)", path.name, len(text))

    async def delete(self, name: str) -> None:
        path = self.path_for(name)
        try:
            await aiofiles.os.remove(path)
        except FileNotFoundError:
            raise NoteNotFoundError(name)
        except OSError as e:
            logger.error("Failed to delete note file %s: %s", path, str(e))
            raise StorageError(
                message="Failed to delete note",
                context={"path": str(path), "os_error": str(e)},
            )

    async def names(self) -> List[str]:
        try:
            entries = await aiofiles.os.listdir(self.root)
        except OSError as e:
            logger.error("Failed to list cache directory %s: %s", self.root, str(e))
            raise StorageError(
                message="Failed to list notes",
                context={"path": str(self.root), "os_error": str(e)},
            )

        names = []
        for entry in entries:
            if not entry.endswith(NOTE_SUFFIX):
                continue
            if not _is_utf8_name(entry):
                # Undecodable bytes come back as surrogates, which no API
                # name can address and JSON cannot carry
                logger.warning("Skipping note file with non-UTF-8 name: %r", entry)
                continue
            if not await aiofiles.os.path.isfile(self.root / entry):
                continue
            names.append(entry[: -len(NOTE_SUFFIX)])
        return names
