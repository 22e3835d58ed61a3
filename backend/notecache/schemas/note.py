"""
NoteCache Backend — Pydantic Response Schemas
===============================================

What:  Pydantic models for the JSON parts of the API.
Why:   Automatic serialization and OpenAPI doc generation for /notes and /health.
Who:   Returned by NoteStore.list_all() and the health route.

Most endpoints speak plain text (note bodies and short confirmations), so
only the list and health responses need models.
"""

from pydantic import BaseModel, Field


class NoteItem(BaseModel):
    """
    What:  One stored note, name and full text.
    Who:   Array item of GET /notes.
    """
    name: str = Field(description="Note name (file name without the .txt suffix)")
    text: str = Field(description="Full note content")


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and cache directory status.
    Who:   Returned by GET /health for monitoring and container health checks.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    cache_dir: str = Field(description="Configured note cache directory")
    note_count: int = Field(description="Number of notes currently stored (-1 if unknown)")
    uptime_seconds: float = Field(description="Seconds since service started")
