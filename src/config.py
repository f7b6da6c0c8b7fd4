from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings validated via Pydantic.

    Values are loaded from environment variables and/or a .env file.
    """

    # Google Drive
    google_credentials: str = ""  # service-account JSON blob, pasted verbatim
    drive_folder_id: str = "1xA6Ckfyi_mXEES4h_olxmnJm2i8ueECR"

    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    dialogues_table: str = "dialogues"

    # Dialogue catalog
    storage_mode: str = "database"
    audio_extensions: list[str] = ["mp3", "wav", "webm"]

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance.

    Gracefully handles missing .env files (e.g. in CI/testing) by falling
    back to environment variables and defaults.
    """
    try:
        return Settings()
    except Exception:
        # If .env is missing or unreadable, build settings from env vars only.
        return Settings(_env_file=None)  # type: ignore[call-arg]


settings = get_settings()
