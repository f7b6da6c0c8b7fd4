"""Error type raised at route boundaries and its JSON 500 handler."""

from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse


class UpstreamError(Exception):
    """A Drive, Supabase or credential failure surfaced to the client as a 500."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


async def upstream_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    message = exc.message if isinstance(exc, UpstreamError) else str(exc)
    return JSONResponse(status_code=500, content={"error": message})
