"""Pydantic request/response schemas for the Dialogue API."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialising snake_case fields as camelCase JSON keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DialogueSummary(CamelModel):
    """One entry of the dialogue list.

    Which optional fields are present depends on the storage mode; unset
    fields are dropped from the response.
    """

    number: int
    label: str
    audio_id: str | None = None
    transcript_id: str | None = None
    highlights_id: str | None = None
    has_transcript: bool | None = None
    has_highlights: bool | None = None


class DialogueContent(CamelModel):
    """Transcript text and saved highlights for one dialogue."""

    transcript: str = ""
    highlights: list[Any] = []


class SaveHighlightsResponse(CamelModel):
    """Acknowledgement for highlights stored in the database."""

    success: bool = True


class DriveSaveResponse(CamelModel):
    """Result of writing ``highlightsN.json`` to the Drive folder."""

    status: Literal["created", "updated"]
    file_id: str
