"""Dialogue endpoints: list, detail, and highlight saving."""

from __future__ import annotations

import asyncio
import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Path

from src.api.dependencies import AppResources, get_resources
from src.api.errors import UpstreamError
from src.api.models import (
    DialogueContent,
    DialogueSummary,
    DriveSaveResponse,
    SaveHighlightsResponse,
)
from src.catalog.matcher import group_files, highlights_filename, transcript_filename
from src.catalog.merge import build_catalog
from src.catalog.transcripts import TranscriptCache
from src.dialogue_config import StorageMode
from src.drive.folder import DriveFolder
from src.storage.models import stamp_highlights

logger = logging.getLogger(__name__)

router = APIRouter()

# Upper bound of the Postgres ``integer`` column holding dialogue numbers
MAX_DIALOGUE_NUMBER = 2**31 - 1

Resources = Annotated[AppResources, Depends(get_resources)]
DialogueNumber = Annotated[int, Path(ge=0, le=MAX_DIALOGUE_NUMBER)]


@router.get(
    "/api/dialogues",
    response_model=list[DialogueSummary],
    response_model_exclude_none=True,
)
async def list_dialogues(resources: Resources) -> list[DialogueSummary]:
    """List dialogues available in the folder, ordered by number."""
    try:
        # Drive and Supabase clients are synchronous; keep them off the event loop.
        return await asyncio.to_thread(_list_catalog, resources)
    except UpstreamError:
        raise
    except Exception as exc:
        logger.exception("Failed to list dialogues")
        raise UpstreamError(str(exc)) from exc


@router.get("/api/dialogues/{number}", response_model=DialogueContent)
async def get_dialogue(number: DialogueNumber, resources: Resources) -> DialogueContent:
    """Return a dialogue's transcript and highlights.

    Missing transcripts or highlights come back empty rather than as 404s.
    In database-backed modes a missing transcript is imported from
    ``transcriptN.txt`` on first read.
    """
    try:
        return await asyncio.to_thread(_load_dialogue, resources, number)
    except UpstreamError:
        raise
    except Exception as exc:
        logger.exception("Failed to load dialogue %d", number)
        raise UpstreamError(str(exc)) from exc


@router.post(
    "/api/dialogues/{number}/highlights",
    response_model=DriveSaveResponse | SaveHighlightsResponse,
)
async def save_highlights(
    number: DialogueNumber,
    highlights: Annotated[list[Any], Body()],
    resources: Resources,
) -> DriveSaveResponse | SaveHighlightsResponse:
    """Replace a dialogue's highlights with the request body.

    Highlight objects sent without a ``date`` are stamped with the save time.
    """
    try:
        return await asyncio.to_thread(_store_highlights, resources, number, highlights)
    except UpstreamError:
        raise
    except Exception as exc:
        logger.exception("Failed to save highlights for dialogue %d", number)
        raise UpstreamError(str(exc)) from exc


def _list_catalog(resources: AppResources) -> list[DialogueSummary]:
    config = resources.config
    folder = resources.require_folder()
    groups = group_files(
        folder.list_files(),
        config.audio_extensions,
        include_highlights=config.writes_to_drive,
    )
    records = resources.require_store().list_dialogues() if config.uses_database else []
    return build_catalog(groups, records, config.storage_mode)


def _load_dialogue(resources: AppResources, number: int) -> DialogueContent:
    folder = resources.require_folder()
    if resources.config.storage_mode is StorageMode.DRIVE:
        return _read_from_drive(folder, number)

    store = resources.require_store()
    record = store.get_dialogue(number)
    transcript = TranscriptCache(store, folder).get_or_import(number, record)
    return DialogueContent(
        transcript=transcript,
        highlights=record.highlights if record else [],
    )


def _store_highlights(
    resources: AppResources, number: int, highlights: list[Any]
) -> DriveSaveResponse | SaveHighlightsResponse:
    stamped = stamp_highlights(highlights)
    folder = resources.require_folder()
    if resources.config.storage_mode is StorageMode.DRIVE:
        status, file_id = folder.save_json(highlights_filename(number), stamped)
        return DriveSaveResponse(status=status, file_id=file_id)

    resources.require_store().save_highlights(number, stamped)
    return SaveHighlightsResponse()


def _read_from_drive(folder: DriveFolder, number: int) -> DialogueContent:
    transcript = ""
    transcript_file = folder.find_file(transcript_filename(number))
    if transcript_file is not None:
        transcript = folder.download_text(transcript_file.id)

    highlights: list[Any] = []
    highlights_file = folder.find_file(highlights_filename(number))
    if highlights_file is not None:
        data = folder.read_json(highlights_file.id)
        highlights = data if isinstance(data, list) else []

    return DialogueContent(transcript=transcript, highlights=highlights)
