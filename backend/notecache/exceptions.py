"""
NoteCache Backend — Custom Exception Hierarchy
================================================

What:  Defines application-specific exceptions for the note store.
Why:   Each failure the store can report maps to exactly one HTTP status code,
       so routes never need try/except blocks of their own.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return short plain-text responses with the matching status code.
Who:   Raised by the store and storage backends; caught by global handlers.
When:  During request processing, and once at startup for configuration.

Exception Hierarchy:
    NoteCacheError (base)
    ├── NoteAlreadyExistsError   → 400 Bad Request (create on existing name)
    ├── NoteNotFoundError        → 404 Not Found (read/update/delete on absent name)
    ├── InvalidNoteNameError     → 400 Bad Request (unsafe or empty name)
    ├── InvalidNoteContentError  → 400 Bad Request (body is not UTF-8 text)
    ├── StorageError             → 500 Internal Server Error (disk I/O failure)
    └── ConfigurationError       → fatal, the process does not start
"""

from typing import Any, Dict, Optional


class NoteCacheError(Exception):
    """
    Base exception for all NoteCache application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NoteAlreadyExistsError(NoteCacheError):
    """
    Raised when creating a note whose name is already taken.

    HTTP:    400 Bad Request
    Why 400 (not 409): existing clients of this API check for 400.
    """

    def __init__(self, name: str, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["name"] = name
        super().__init__(message="Note already exists", context=ctx)
        self.name = name


class NoteNotFoundError(NoteCacheError):
    """
    Raised when a requested note does not exist.

    What:    GET, PUT or DELETE on /notes/{name} for an absent name.
    HTTP:    404 Not Found
    """

    def __init__(self, name: str, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["name"] = name
        super().__init__(message="Note not found", context=ctx)
        self.name = name


class InvalidNoteNameError(NoteCacheError):
    """
    Raised when a note name cannot be mapped safely to a file in the cache.

    When:    Empty names, "." and "..", or names containing a path separator
             or NUL byte.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        name: str,
        reason: str = "invalid note name",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["name"] = name
        super().__init__(message=f"Invalid note name: {reason}", context=ctx)
        self.name = name
        self.reason = reason


class InvalidNoteContentError(NoteCacheError):
    """
    Raised when a request body cannot be decoded as UTF-8 text.

    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Note text must be valid UTF-8",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StorageError(NoteCacheError):
    """
    Raised when file system operations fail.

    What:    Could not read, write, list or delete a note file.
    When:    Disk full, permission denied, I/O error.
    HTTP:    500 Internal Server Error

    The client only sees the generic message; the OS error and path are kept
    in `context` for the server log.
    """

    def __init__(
        self,
        message: str = "Note storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ConfigurationError(NoteCacheError):
    """
    Raised when the service is configured with a missing cache directory.

    When:    CLI startup and application lifespan startup.
    Effect:  The CLI exits with status 1; uvicorn aborts startup.
    """

    def __init__(
        self,
        message: str = "Invalid configuration",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
