"""
NoteCache Backend — Application Package Initializer
===================================================

What:  Marks the `notecache` directory as a Python package.
Why:   Enables module imports like `from notecache.config import settings`.
Who:   Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The service is a thin HTTP shell over a flat directory of text files:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │       NoteStore (Business Logic)    │  ← Existence gates, name checks
    ├─────────────────────────────────────┤
    │        Storage Backends (I/O)       │  ← Files on disk, or a dict in tests
    └─────────────────────────────────────┘

    Routes translate results and exceptions to status codes; the store owns
    the "exists or not" rules; backends only move text in and out.
"""

__version__ = "1.0.0"
