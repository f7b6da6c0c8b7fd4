"""Catalog configuration: storage-mode enum and DialogueConfig dataclass."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from src.config import Settings

DRIVE_READONLY_SCOPE = "https://www.googleapis.com/auth/drive.readonly"
DRIVE_SCOPE = "https://www.googleapis.com/auth/drive"

DEFAULT_AUDIO_EXTENSIONS = ("mp3", "wav", "webm")


class StorageMode(StrEnum):
    """Where highlights and transcript text live.

    ``drive``    -- everything in the Drive folder, list = audio & transcript pairs.
    ``hybrid``   -- pairs from Drive, titles and highlights from the database.
    ``database`` -- every audio file listed, transcript/highlights from the database.
    """

    DRIVE = "drive"
    HYBRID = "hybrid"
    DATABASE = "database"


@dataclass(frozen=True)
class DialogueConfig:
    """Immutable configuration for catalog building and storage routing.

    An empty ``audio_extensions`` tuple switches the audio matcher to a bare
    ``audioN`` prefix match with any suffix.
    """

    storage_mode: StorageMode = StorageMode.DATABASE
    audio_extensions: tuple[str, ...] = DEFAULT_AUDIO_EXTENSIONS
    folder_id: str = ""

    @classmethod
    def from_settings(cls, settings: Settings) -> DialogueConfig:
        return cls(
            storage_mode=StorageMode(settings.storage_mode.lower()),
            audio_extensions=tuple(ext.lower().lstrip(".") for ext in settings.audio_extensions),
            folder_id=settings.drive_folder_id,
        )

    @property
    def writes_to_drive(self) -> bool:
        return self.storage_mode is StorageMode.DRIVE

    @property
    def uses_database(self) -> bool:
        return self.storage_mode is not StorageMode.DRIVE

    @property
    def drive_scopes(self) -> list[str]:
        return [DRIVE_SCOPE if self.writes_to_drive else DRIVE_READONLY_SCOPE]
