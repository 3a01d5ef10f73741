from __future__ import annotations

import io
import sys
from pathlib import Path

import pytest
from PIL import Image

# Make the bizcard package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from bizcard.core import config as core_config  # noqa: E402
from bizcard.core.rate_limiter import reset_rate_limits  # noqa: E402
from bizcard.db import models  # noqa: E402
from bizcard.db import session as db_session  # noqa: E402


@pytest.fixture()
def temp_db(tmp_path, monkeypatch):
    """Point the app at a temporary SQLite file and reset settings/engine caches."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    monkeypatch.setenv("UPLOADS_DIR", str(tmp_path / "uploads"))
    monkeypatch.setenv("PUBLIC_BASE_URL", "https://cards.example.com")
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]

    engine = db_session.get_engine()
    models.Base.metadata.drop_all(bind=engine)
    models.Base.metadata.create_all(bind=engine)

    yield db_file

    try:
        models.Base.metadata.drop_all(bind=engine)
    except Exception:
        pass
    try:
        engine.dispose()
    except Exception:
        pass
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]


@pytest.fixture(autouse=True)
def _clean_rate_limits():
    reset_rate_limits()
    yield
    reset_rate_limits()


@pytest.fixture()
def anyio_backend():
    return "asyncio"


class MemoryStorage:
    """Blob storage double that keeps objects in a dict."""

    def __init__(self, fail_on_store: bool = False) -> None:
        self.objects: dict[tuple[str, str], bytes] = {}
        self.fail_on_store = fail_on_store

    def store(self, bucket: str, path: str, data: bytes, content_type: str) -> None:
        if self.fail_on_store:
            raise OSError("bucket unavailable")
        self.objects[(bucket, path)] = data

    def public_url(self, bucket: str, path: str) -> str:
        if (bucket, path) not in self.objects:
            raise FileNotFoundError(path)
        return f"https://blobs.example.com/{bucket}/{path}"


@pytest.fixture()
def memory_storage():
    return MemoryStorage()


def make_image(fmt: str = "PNG", size: tuple[int, int] = (1200, 900)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, (200, 30, 30)).save(buffer, format=fmt)
    return buffer.getvalue()
