"""Process-wide clients built once at startup and injected into route handlers."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import Request

from src.api.errors import UpstreamError
from src.config import Settings
from src.dialogue_config import DialogueConfig
from src.drive.credentials import build_credentials, build_drive_service
from src.drive.folder import DriveFolder
from src.storage.dialogues import DialogueStore, get_supabase_client

logger = logging.getLogger(__name__)


@dataclass
class AppResources:
    """Long-lived Drive and Supabase handles plus any error raised building them.

    A failed client does not stop the process; every route that needs it
    answers with a 500 carrying the original message instead.
    """

    config: DialogueConfig
    folder: DriveFolder | None = None
    store: DialogueStore | None = None
    drive_error: Exception | None = None
    store_error: Exception | None = None

    def require_folder(self) -> DriveFolder:
        if self.folder is None:
            raise UpstreamError(str(self.drive_error or "Drive client is not initialised"))
        return self.folder

    def require_store(self) -> DialogueStore:
        if self.store is None:
            raise UpstreamError(str(self.store_error or "Dialogue store is not initialised"))
        return self.store

    def close(self) -> None:
        if self.folder is not None:
            self.folder.close()
        self.folder = None
        self.store = None


def create_resources(settings: Settings) -> AppResources:
    config = DialogueConfig.from_settings(settings)
    resources = AppResources(config=config)

    try:
        credentials = build_credentials(settings.google_credentials, config.drive_scopes)
        resources.folder = DriveFolder(
            build_drive_service(credentials), credentials, config.folder_id
        )
    except Exception as exc:
        logger.error("Drive client unavailable: %s", exc)
        resources.drive_error = exc

    if config.uses_database:
        try:
            resources.store = DialogueStore(
                get_supabase_client(settings), settings.dialogues_table
            )
        except Exception as exc:
            logger.error("Dialogue store unavailable: %s", exc)
            resources.store_error = exc

    logger.info(
        "Dialogue API ready (mode=%s, folder=%s)", config.storage_mode, config.folder_id
    )
    return resources


def get_resources(request: Request) -> AppResources:
    resources: AppResources | None = getattr(request.app.state, "resources", None)
    if resources is None:
        raise UpstreamError("Application resources are not initialised")
    return resources
