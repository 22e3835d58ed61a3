"""
NoteCache Backend — Request ID Middleware
===========================================

What:  Tags each incoming request with a short ID and echoes it in the response.
Why:   A single note operation produces several log lines (the access line,
       "Note created: ..." from the store, a storage error with its OS
       details). The ID ties them together, and since error bodies are bare
       plain text ("Failed to save note"), the X-Request-ID response header
       is what a client quotes to find the server-side details.
How:   Accepts the client's X-Request-ID when it is a short token, otherwise
       generates one; stores it in a ContextVar read by loggers and handlers.

Client-supplied IDs are written into log lines verbatim, so anything other
than 1-64 letters, digits, "-", "_" or "." is replaced with a fresh ID.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"

_CLIENT_ID_RE = re.compile(r"[A-Za-z0-9._-]{1,64}")


def resolve_request_id(client_value: Optional[str]) -> str:
    """Return the client's ID if it is a safe token, else a new 8-char hex ID."""
    if client_value and _CLIENT_ID_RE.fullmatch(client_value):
        return client_value
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Outermost middleware: every log line below it can read request_id_var."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request_id_var.set(rid)

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
