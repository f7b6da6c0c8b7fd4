"""Reconcile Drive file groups with database records into list payloads."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from src.api.models import DialogueSummary
from src.catalog.matcher import FileGroup
from src.dialogue_config import StorageMode
from src.storage.models import DialogueRecord, default_title


def build_catalog(
    groups: Mapping[int, FileGroup],
    records: Iterable[DialogueRecord] = (),
    mode: StorageMode = StorageMode.DATABASE,
) -> list[DialogueSummary]:
    """Build the dialogue list for *mode*, sorted by numeric dialogue number.

    ``drive`` and ``hybrid`` list only numbers with both audio and transcript
    files; ``database`` lists every number with an audio file and reports
    transcript/highlight presence from the records.
    """
    by_number = {record.number: record for record in records}
    result: list[DialogueSummary] = []

    for number in sorted(groups):
        group = groups[number]
        record = by_number.get(number)

        if mode is StorageMode.DATABASE:
            if not group.audio_id:
                continue
            result.append(
                DialogueSummary(
                    number=number,
                    label=record.title if record else default_title(number),
                    audio_id=group.audio_id,
                    has_transcript=record.has_transcript if record else False,
                    has_highlights=record.has_highlights if record else False,
                )
            )
            continue

        if not (group.audio_id and group.transcript_id):
            continue

        if mode is StorageMode.HYBRID:
            result.append(
                DialogueSummary(
                    number=number,
                    label=record.title if record else default_title(number),
                    audio_id=group.audio_id,
                    transcript_id=group.transcript_id,
                )
            )
        else:
            result.append(
                DialogueSummary(
                    number=number,
                    label=default_title(number),
                    audio_id=group.audio_id,
                    transcript_id=group.transcript_id,
                    highlights_id=group.highlights_id,
                )
            )

    return result
