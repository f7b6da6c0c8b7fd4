"""Google Drive folder gateway: list, look up, download, stream and write files."""

from __future__ import annotations

import io
import json
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

import google_auth_httplib2
import httplib2
from googleapiclient.http import MediaIoBaseDownload, MediaIoBaseUpload

logger = logging.getLogger(__name__)

# Fixed listing page size; folders beyond this are not paginated.
PAGE_SIZE = 1000

# 1 MB download chunks for streamed media
STREAM_CHUNK_SIZE = 1024 * 1024


@dataclass(frozen=True)
class DriveFile:
    """An (id, name) entry from the Drive folder."""

    id: str
    name: str
    mime_type: str | None = None


def _quote(value: str) -> str:
    """Escape a literal for use inside a Drive ``q`` expression."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def _to_drive_file(f: dict[str, Any]) -> DriveFile:
    return DriveFile(id=f["id"], name=f["name"], mime_type=f.get("mimeType"))


class DriveFolder:
    """Operations against a single Drive folder.

    The Drive service object is shared across requests, but every call runs
    on its own authorized httplib2 transport: httplib2 connections are not
    thread-safe and route handlers call in from worker threads.
    """

    def __init__(self, service: Any, credentials: Any, folder_id: str) -> None:
        self._service = service
        self._credentials = credentials
        self.folder_id = folder_id

    @contextmanager
    def _transport(self) -> Iterator[google_auth_httplib2.AuthorizedHttp]:
        http = httplib2.Http()
        try:
            yield google_auth_httplib2.AuthorizedHttp(self._credentials, http=http)
        finally:
            http.close()

    def _execute(self, request: Any) -> Any:
        with self._transport() as http:
            return request.execute(http=http)

    def list_files(self) -> list[DriveFile]:
        response = self._execute(
            self._service.files().list(
                q=f"'{_quote(self.folder_id)}' in parents and trashed=false",
                fields="files(id, name, mimeType)",
                pageSize=PAGE_SIZE,
            )
        )
        return [_to_drive_file(f) for f in response.get("files", [])]

    def find_file(self, name: str) -> DriveFile | None:
        """Return the file literally named *name* in the folder, if any."""
        response = self._execute(
            self._service.files().list(
                q=(
                    f"'{_quote(self.folder_id)}' in parents "
                    f"and name = '{_quote(name)}' and trashed=false"
                ),
                fields="files(id, name, mimeType)",
                pageSize=1,
            )
        )
        files = response.get("files", [])
        return _to_drive_file(files[0]) if files else None

    def get_metadata(self, file_id: str) -> dict[str, Any]:
        return self._execute(self._service.files().get(fileId=file_id, fields="id, name, mimeType"))

    def download_text(self, file_id: str) -> str:
        content = self._execute(self._service.files().get_media(fileId=file_id))
        if isinstance(content, bytes):
            # utf-8-sig drops the BOM Windows editors prepend
            return content.decode("utf-8-sig")
        return str(content)

    def read_json(self, file_id: str) -> Any:
        return json.loads(self.download_text(file_id))

    def iter_media(self, file_id: str, chunk_size: int = STREAM_CHUNK_SIZE) -> Iterator[bytes]:
        """Yield the file's bytes chunk by chunk as Drive returns them."""
        request = self._service.files().get_media(fileId=file_id)
        with self._transport() as http:
            request.http = http
            buffer = io.BytesIO()
            downloader = MediaIoBaseDownload(buffer, request, chunksize=chunk_size)
            done = False
            while not done:
                _, done = downloader.next_chunk()
                data = buffer.getvalue()
                if data:
                    yield data
                buffer.seek(0)
                buffer.truncate()

    def save_json(self, name: str, data: Any) -> tuple[str, str]:
        """Create or overwrite a JSON file in the folder.

        Returns ``(status, file_id)`` where status is ``"created"`` or ``"updated"``.
        """
        body = json.dumps(data, ensure_ascii=False, indent=2).encode("utf-8")
        media = MediaIoBaseUpload(io.BytesIO(body), mimetype="application/json", resumable=False)

        existing = self.find_file(name)
        if existing is not None:
            result = self._execute(
                self._service.files().update(fileId=existing.id, media_body=media, fields="id")
            )
            logger.info("Updated %s (%s)", name, result["id"])
            return "updated", result["id"]

        result = self._execute(
            self._service.files().create(
                body={"name": name, "parents": [self.folder_id], "mimeType": "application/json"},
                media_body=media,
                fields="id",
            )
        )
        logger.info("Created %s (%s)", name, result["id"])
        return "created", result["id"]

    def close(self) -> None:
        self._service.close()
