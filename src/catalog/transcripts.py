"""Cache-aside access to transcript text: database first, Drive on a miss."""

from __future__ import annotations

import logging

from src.catalog.matcher import transcript_filename
from src.drive.folder import DriveFolder
from src.storage.dialogues import DialogueStore
from src.storage.models import DialogueRecord

logger = logging.getLogger(__name__)


class TranscriptCache:
    """Serve transcript text from the record store, importing it from Drive once."""

    def __init__(self, store: DialogueStore, folder: DriveFolder) -> None:
        self._store = store
        self._folder = folder

    def get_or_import(self, number: int, record: DialogueRecord | None = None) -> str:
        """Return the transcript for *number*, importing ``transcriptN.txt`` if missing.

        Pass an already-fetched *record* to skip the extra database read.
        Returns an empty string when neither the store nor the folder has it.
        """
        if record is None:
            record = self._store.get_dialogue(number)
        if record is not None and record.transcript_text:
            return record.transcript_text

        name = transcript_filename(number)
        drive_file = self._folder.find_file(name)
        if drive_file is None:
            logger.info("No %s in folder; dialogue %d has no transcript", name, number)
            return ""

        text = self._folder.download_text(drive_file.id)
        return self._store.store_transcript(number, text)
