"""Supabase storage helpers for dialogue records."""

from __future__ import annotations

import logging
from typing import Any, cast

from supabase import Client, create_client

from src.config import Settings
from src.storage.models import DialogueRecord, default_title

logger = logging.getLogger(__name__)


class StoreConfigError(RuntimeError):
    """Raised when the Supabase connection settings are missing."""


def get_supabase_client(settings: Settings) -> Client:
    """Create and return a Supabase client from the application settings."""
    if not settings.supabase_url or not settings.supabase_key:
        raise StoreConfigError("SUPABASE_URL and SUPABASE_KEY must be configured")
    return create_client(settings.supabase_url, settings.supabase_key)


class DialogueStore:
    """Reads and writes dialogue rows keyed by their unique ``number``.

    Writes never check-then-insert: the row is first ensured with an
    ``ON CONFLICT (number) DO NOTHING`` upsert, then updated in place.
    """

    def __init__(self, client: Client, table: str = "dialogues") -> None:
        self._client = client
        self._table = table

    def list_dialogues(self) -> list[DialogueRecord]:
        result = self._client.table(self._table).select("*").order("number").execute()
        rows = cast(list[dict[str, Any]], result.data)
        return [DialogueRecord.from_row(row) for row in rows]

    def get_dialogue(self, number: int) -> DialogueRecord | None:
        result = self._client.table(self._table).select("*").eq("number", number).execute()
        rows = cast(list[dict[str, Any]], result.data)
        if not rows:
            return None
        return DialogueRecord.from_row(rows[0])

    def ensure_dialogue(self, number: int) -> None:
        """Create the row for *number* with its default title unless it exists."""
        (
            self._client.table(self._table)
            .upsert(
                {"number": number, "title": default_title(number)},
                on_conflict="number",
                ignore_duplicates=True,
            )
            .execute()
        )

    def save_highlights(self, number: int, highlights: list[Any]) -> DialogueRecord:
        """Replace the dialogue's highlights with *highlights* verbatim."""
        self.ensure_dialogue(number)
        result = (
            self._client.table(self._table)
            .update({"highlights": highlights})
            .eq("number", number)
            .execute()
        )
        rows = cast(list[dict[str, Any]], result.data)
        logger.info("Saved %d highlights for dialogue %d", len(highlights), number)
        if rows:
            return DialogueRecord.from_row(rows[0])
        return DialogueRecord(number=number, title=default_title(number), highlights=highlights)

    def store_transcript(self, number: int, text: str) -> str:
        """Store *text* unless a transcript is already present; return the stored text.

        The update only matches rows whose transcript is still empty, so when
        two importers race the first write is kept and returned to both.
        """
        self.ensure_dialogue(number)
        result = (
            self._client.table(self._table)
            .update({"transcript_text": text})
            .eq("number", number)
            .or_("transcript_text.is.null,transcript_text.eq.")
            .execute()
        )
        rows = cast(list[dict[str, Any]], result.data)
        if rows:
            logger.info("Imported transcript for dialogue %d (%d chars)", number, len(text))
            return text

        existing = self.get_dialogue(number)
        if existing is not None and existing.transcript_text:
            return existing.transcript_text
        return text
