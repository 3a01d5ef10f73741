"""
Configuration helpers for the business card backend.

Routers/services read settings through get_settings() so that nothing fetches
os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os
from pathlib import Path

_DEFAULT_UPLOADS = Path(__file__).resolve().parents[2] / "uploads"


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    public_base_url: str
    database_url: str
    uploads_dir: str
    avatars_bucket: str
    max_upload_bytes: int
    session_ttl_seconds: int
    log_level: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        public_base_url=os.getenv("PUBLIC_BASE_URL", "http://localhost:8000").rstrip("/"),
        database_url=os.getenv("DATABASE_URL", "sqlite:///./bizcard.db"),
        uploads_dir=os.getenv("UPLOADS_DIR", str(_DEFAULT_UPLOADS)),
        avatars_bucket=os.getenv("AVATARS_BUCKET", "avatars"),
        max_upload_bytes=_int(os.getenv("MAX_UPLOAD_BYTES", str(2 * 1024 * 1024)), 2 * 1024 * 1024),
        session_ttl_seconds=_int(os.getenv("SESSION_TTL_SECONDS", "86400"), 86400),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
