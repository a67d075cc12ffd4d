"""
app/core/config.py

Centralised configuration loaded from environment variables.
Use a .env file locally; Docker Compose injects these at runtime.
"""

from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # ── Application ────────────────────────────────────────────────────────────
    app_name: str = "PDF Upload Gateway"
    app_version: str = "1.0.0"
    debug: bool = False

    # ── Server ─────────────────────────────────────────────────────────────────
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: str = "*"     # comma separated

    # ── Metadata store ─────────────────────────────────────────────────────────
    database_url: str = "sqlite+aiosqlite:///./data/uploads.db"

    # ── File storage ───────────────────────────────────────────────────────────
    upload_dir: str = "uploads"
    incoming_dir: Optional[str] = None      # defaults to <upload_dir>/.incoming
    keep_failed_uploads: bool = False       # keep the temp file when a 500 occurs

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    @property
    def upload_path(self) -> Path:
        """Absolute path of the permanent uploads directory."""
        return Path(self.upload_dir).resolve()

    @property
    def incoming_path(self) -> Path:
        """Absolute path where multipart parts are spooled before validation."""
        if self.incoming_dir:
            return Path(self.incoming_dir).resolve()
        return self.upload_path / ".incoming"

    @property
    def cors_origin_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


# Single shared instance — import this everywhere.
settings = Settings()
