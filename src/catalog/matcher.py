"""Classify Drive filenames by role and group them by dialogue number.

Naming convention in the folder:

- ``audio7.mp3``      -- audio for dialogue 7
- ``transcript7.txt`` -- transcript text for dialogue 7
- ``highlights7.json`` -- saved highlights for dialogue 7 (Drive storage mode)
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from functools import lru_cache

from src.dialogue_config import DEFAULT_AUDIO_EXTENSIONS
from src.drive.folder import DriveFile

_TRANSCRIPT_RE = re.compile(r"^transcript(\d+)\.txt$", re.IGNORECASE)
_HIGHLIGHTS_RE = re.compile(r"^highlights(\d+)\.json$", re.IGNORECASE)


@dataclass(frozen=True)
class AudioFile:
    number: int
    ext: str


@dataclass(frozen=True)
class TranscriptFile:
    number: int


@dataclass(frozen=True)
class HighlightsFile:
    number: int


@dataclass(frozen=True)
class Unrecognized:
    pass


FileRole = AudioFile | TranscriptFile | HighlightsFile | Unrecognized


@dataclass
class FileGroup:
    """Drive file ids found for one dialogue number."""

    audio_id: str | None = None
    transcript_id: str | None = None
    highlights_id: str | None = None


@lru_cache(maxsize=16)
def _audio_pattern(extensions: tuple[str, ...]) -> re.Pattern[str]:
    if not extensions:
        # Relaxed form: any name starting with audioN
        return re.compile(r"^audio(\d+)\.?(.*)$", re.IGNORECASE | re.DOTALL)
    alternatives = "|".join(re.escape(ext) for ext in extensions)
    return re.compile(rf"^audio(\d+)\.({alternatives})$", re.IGNORECASE)


def parse_filename(
    name: str,
    audio_extensions: Sequence[str] = DEFAULT_AUDIO_EXTENSIONS,
) -> FileRole:
    """Return the role *name* plays in the folder and its dialogue number."""
    match = _audio_pattern(tuple(audio_extensions)).match(name)
    if match:
        return AudioFile(number=int(match.group(1)), ext=match.group(2).lower())

    match = _TRANSCRIPT_RE.match(name)
    if match:
        return TranscriptFile(number=int(match.group(1)))

    match = _HIGHLIGHTS_RE.match(name)
    if match:
        return HighlightsFile(number=int(match.group(1)))

    return Unrecognized()


def group_files(
    files: Iterable[DriveFile],
    audio_extensions: Sequence[str] = DEFAULT_AUDIO_EXTENSIONS,
    include_highlights: bool = True,
) -> dict[int, FileGroup]:
    """Group folder files by dialogue number.

    When several files share a role and number the last one listed wins.
    """
    groups: dict[int, FileGroup] = {}
    for f in files:
        role = parse_filename(f.name, audio_extensions)
        if isinstance(role, AudioFile):
            groups.setdefault(role.number, FileGroup()).audio_id = f.id
        elif isinstance(role, TranscriptFile):
            groups.setdefault(role.number, FileGroup()).transcript_id = f.id
        elif isinstance(role, HighlightsFile) and include_highlights:
            groups.setdefault(role.number, FileGroup()).highlights_id = f.id
    return groups


def transcript_filename(number: int) -> str:
    return f"transcript{number}.txt"


def highlights_filename(number: int) -> str:
    return f"highlights{number}.json"
