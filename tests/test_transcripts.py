"""Tests for the transcript cache-aside import."""

from __future__ import annotations

from src.catalog.transcripts import TranscriptCache
from src.storage.models import DialogueRecord


def test_import_happens_once(folder, store) -> None:
    folder.add("transcript5.txt", "Текст пятого диалога")
    cache = TranscriptCache(store, folder)

    first = cache.get_or_import(5)
    second = cache.get_or_import(5)

    assert first == second == "Текст пятого диалога"
    assert folder.download_calls == 1
    assert store.records[5].transcript_text == "Текст пятого диалога"
    assert store.records[5].title == "Dialogue 5"


def test_stored_transcript_skips_drive(folder, store) -> None:
    store.records[1] = DialogueRecord(number=1, title="One", transcript_text="stored text")
    cache = TranscriptCache(store, folder)

    assert cache.get_or_import(1) == "stored text"
    assert folder.find_calls == 0
    assert folder.download_calls == 0


def test_empty_stored_transcript_is_reimported(folder, store) -> None:
    store.records[1] = DialogueRecord(number=1, title="One", transcript_text="")
    cache = TranscriptCache(store, folder)

    assert cache.get_or_import(1) == "Привет, как дела?"
    assert store.records[1].title == "One"


def test_missing_file_returns_empty_without_writing(folder, store) -> None:
    cache = TranscriptCache(store, folder)

    assert cache.get_or_import(42) == ""
    assert 42 not in store.records


def test_prefetched_record_is_used(folder, store) -> None:
    record = DialogueRecord(number=2, title="Two", transcript_text="already here")
    cache = TranscriptCache(store, folder)

    assert cache.get_or_import(2, record) == "already here"
    assert folder.find_calls == 0


def test_concurrent_import_keeps_first_text(folder, store) -> None:
    """A losing importer gets the text the winner stored."""
    store.store_transcript(1, "winner")
    cache = TranscriptCache(store, folder)

    stale = DialogueRecord(number=1, title="Dialogue 1", transcript_text=None)
    assert cache.get_or_import(1, stale) == "winner"
