"""File streaming endpoints: forward Drive bytes to the client as they arrive."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterator
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse, StreamingResponse

from src.api.dependencies import AppResources, get_resources

logger = logging.getLogger(__name__)

router = APIRouter()

DEFAULT_MEDIA_TYPE = "application/octet-stream"


@router.get("/api/file/{file_id}", response_model=None)
@router.get("/api/audio/{file_id}", response_model=None)
async def stream_file(
    file_id: str,
    resources: Annotated[AppResources, Depends(get_resources)],
) -> StreamingResponse | PlainTextResponse:
    """Stream a folder file with the content type Drive reports for it.

    The first chunk is fetched before responding so that an upstream failure
    still yields a 500; failures after that can only cut the stream short.
    """
    folder = resources.require_folder()
    try:
        metadata = await asyncio.to_thread(folder.get_metadata, file_id)
        chunks = folder.iter_media(file_id)
        first = await asyncio.to_thread(next, chunks, b"")
    except Exception:
        logger.exception("Error streaming file %s", file_id)
        return PlainTextResponse("Error streaming file", status_code=500)

    return StreamingResponse(
        _forward(file_id, first, chunks),
        media_type=metadata.get("mimeType") or DEFAULT_MEDIA_TYPE,
    )


def _forward(file_id: str, first: bytes, chunks: Iterator[bytes]) -> Iterator[bytes]:
    if first:
        yield first
    try:
        yield from chunks
    except Exception:
        logger.exception("Stream for file %s failed mid-transfer", file_id)
        raise
