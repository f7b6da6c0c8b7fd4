"""Data models for the dialogue record store."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


def default_title(number: int) -> str:
    return f"Dialogue {number}"


def stamp_highlights(highlights: list[Any], now: datetime | None = None) -> list[Any]:
    """Give each highlight object without a ``date`` the save time.

    Items are otherwise kept as sent; non-object items pass through untouched.
    """
    stamp = (now or datetime.now(UTC)).isoformat()
    return [
        {**item, "date": stamp} if isinstance(item, dict) and "date" not in item else item
        for item in highlights
    ]


@dataclass
class DialogueRecord:
    """One row of the ``dialogues`` table."""

    number: int
    title: str
    audio_drive_id: str | None = None
    transcript_text: str | None = None
    highlights: list[Any] = field(default_factory=list)

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> DialogueRecord:
        number = int(row["number"])
        return cls(
            number=number,
            title=row.get("title") or default_title(number),
            audio_drive_id=row.get("audio_drive_id"),
            transcript_text=row.get("transcript_text"),
            highlights=row.get("highlights") or [],
        )

    @property
    def has_transcript(self) -> bool:
        return bool(self.transcript_text)

    @property
    def has_highlights(self) -> bool:
        return bool(self.highlights)
