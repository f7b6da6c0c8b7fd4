"""Build an authenticated Google Drive v3 service from a JSON credential blob."""

from __future__ import annotations

import json
from typing import Any

from google.oauth2 import service_account
from googleapiclient.discovery import build


class CredentialsError(ValueError):
    """Raised when the service-account blob is missing or not valid JSON."""


def load_service_account_info(raw: str | None) -> dict[str, Any]:
    """Parse the ``GOOGLE_CREDENTIALS`` blob into a dict.

    No validation happens beyond JSON parsing; google-auth rejects
    incomplete service-account info on its own.
    """
    if raw is None or not raw.strip():
        raise CredentialsError("GOOGLE_CREDENTIALS is not configured")
    try:
        info = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise CredentialsError(f"GOOGLE_CREDENTIALS is not valid JSON: {exc}") from exc
    if not isinstance(info, dict):
        raise CredentialsError("GOOGLE_CREDENTIALS must be a JSON object")
    return info


def build_credentials(raw: str | None, scopes: list[str]) -> service_account.Credentials:
    info = load_service_account_info(raw)
    try:
        return service_account.Credentials.from_service_account_info(info, scopes=scopes)
    except ValueError as exc:
        raise CredentialsError(f"GOOGLE_CREDENTIALS rejected: {exc}") from exc


def build_drive_service(
    credentials: service_account.Credentials,
) -> Any:
    """Return a Drive v3 resource bound to *credentials*."""
    return build("drive", "v3", credentials=credentials, cache_discovery=False)
