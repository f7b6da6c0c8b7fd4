"""Shared fixtures: in-memory Drive folder and dialogue store doubles."""

from __future__ import annotations

import copy
import json
import time
from collections.abc import Callable, Iterator
from typing import Any

import pytest
from fastapi.testclient import TestClient

from src.api.dependencies import AppResources, get_resources
from src.api.main import app
from src.dialogue_config import DialogueConfig, StorageMode
from src.drive.folder import DriveFile
from src.storage.models import DialogueRecord, default_title


class FakeFolder:
    """Drive folder double keeping file bodies in memory and counting reads."""

    def __init__(self, files: dict[str, bytes | str] | None = None) -> None:
        self._files: dict[str, tuple[str, bytes, str]] = {}
        self.download_calls = 0
        self.find_calls = 0
        self.fail_stream = False
        self.fail_after_first = False
        self.list_delay = 0.0
        for name, content in (files or {}).items():
            self.add(name, content)

    def add(self, name: str, content: bytes | str, mime_type: str | None = None) -> str:
        file_id = f"id-{name}"
        data = content.encode("utf-8") if isinstance(content, str) else content
        if mime_type is None:
            mime_type = "audio/mpeg" if name.lower().startswith("audio") else "text/plain"
        self._files[name] = (file_id, data, mime_type)
        return file_id

    def _by_id(self, file_id: str) -> tuple[str, bytes, str]:
        for name, (fid, data, mime) in self._files.items():
            if fid == file_id:
                return name, data, mime
        raise LookupError(f"File not found: {file_id}")

    def list_files(self) -> list[DriveFile]:
        if self.list_delay:
            time.sleep(self.list_delay)
        return [DriveFile(id=fid, name=name, mime_type=mime) for name, (fid, _, mime) in self._files.items()]

    def find_file(self, name: str) -> DriveFile | None:
        self.find_calls += 1
        if name not in self._files:
            return None
        fid, _, mime = self._files[name]
        return DriveFile(id=fid, name=name, mime_type=mime)

    def get_metadata(self, file_id: str) -> dict[str, Any]:
        name, _, mime = self._by_id(file_id)
        return {"id": file_id, "name": name, "mimeType": mime}

    def download_text(self, file_id: str) -> str:
        self.download_calls += 1
        return self._by_id(file_id)[1].decode("utf-8")

    def read_json(self, file_id: str) -> Any:
        return json.loads(self.download_text(file_id))

    def iter_media(self, file_id: str, chunk_size: int = 4) -> Iterator[bytes]:
        if self.fail_stream:
            raise RuntimeError("upstream read failed")
        data = self._by_id(file_id)[1]
        for i in range(0, len(data), chunk_size):
            yield data[i : i + chunk_size]
            if self.fail_after_first:
                raise RuntimeError("connection reset by Drive")

    def save_json(self, name: str, data: Any) -> tuple[str, str]:
        status = "updated" if name in self._files else "created"
        file_id = self.add(name, json.dumps(data, ensure_ascii=False), "application/json")
        return status, file_id

    def close(self) -> None:
        pass


class FakeStore:
    """Dialogue store double backed by a dict keyed by number."""

    def __init__(self, records: list[DialogueRecord] | None = None) -> None:
        self.records: dict[int, DialogueRecord] = {r.number: r for r in records or []}
        self.fail = False

    def _check(self) -> None:
        if self.fail:
            raise RuntimeError("database unavailable")

    def list_dialogues(self) -> list[DialogueRecord]:
        self._check()
        return [copy.deepcopy(r) for _, r in sorted(self.records.items())]

    def get_dialogue(self, number: int) -> DialogueRecord | None:
        self._check()
        record = self.records.get(number)
        return copy.deepcopy(record) if record else None

    def ensure_dialogue(self, number: int) -> DialogueRecord:
        return self.records.setdefault(number, DialogueRecord(number=number, title=default_title(number)))

    def save_highlights(self, number: int, highlights: list[Any]) -> DialogueRecord:
        self._check()
        record = self.ensure_dialogue(number)
        record.highlights = copy.deepcopy(highlights)
        return copy.deepcopy(record)

    def store_transcript(self, number: int, text: str) -> str:
        self._check()
        record = self.ensure_dialogue(number)
        if not record.transcript_text:
            record.transcript_text = text
        return record.transcript_text


@pytest.fixture
def folder() -> FakeFolder:
    return FakeFolder(
        {
            "audio1.mp3": b"ID3-audio-one",
            "transcript1.txt": "Привет, как дела?",
            "audio2.wav": b"RIFF-audio-two",
            "transcript2.txt": "Хорошо, спасибо.",
            "audio10.webm": b"webm-audio-ten",
            "transcript10.txt": "До свидания.",
            "audio7.mp3": b"ID3-audio-seven",
            "notes.docx": b"ignored",
        }
    )


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def make_client() -> Iterator[Callable[..., TestClient]]:
    """Return a factory building a TestClient wired to the given doubles."""

    def factory(
        folder: FakeFolder | None = None,
        store: FakeStore | None = None,
        mode: StorageMode = StorageMode.DATABASE,
        drive_error: Exception | None = None,
        store_error: Exception | None = None,
        audio_extensions: tuple[str, ...] = ("mp3", "wav", "webm"),
        raise_server_exceptions: bool = True,
    ) -> TestClient:
        resources = AppResources(
            config=DialogueConfig(storage_mode=mode, audio_extensions=audio_extensions, folder_id="folder-1"),
            folder=folder,  # type: ignore[arg-type]
            store=store,  # type: ignore[arg-type]
            drive_error=drive_error,
            store_error=store_error,
        )
        app.dependency_overrides[get_resources] = lambda: resources
        return TestClient(app, raise_server_exceptions=raise_server_exceptions)

    yield factory
    app.dependency_overrides.clear()
