"""
Object storage for uploaded images.

LocalBlobStorage keeps objects under UPLOADS_DIR/{bucket}/{path}; the app
serves that directory at /static/uploads so the public URL is available as
soon as the write returns.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Protocol

from bizcard.core.config import get_settings
from bizcard.core.urls import join_public_url

UPLOADS_URL_PREFIX = "/static/uploads"


class BlobStorage(Protocol):
    def store(self, bucket: str, path: str, data: bytes, content_type: str) -> None: ...

    def public_url(self, bucket: str, path: str) -> str: ...


class LocalBlobStorage:
    def __init__(self, root: str | None = None, public_base: str | None = None) -> None:
        self.root = Path(root or get_settings().uploads_dir)
        self.public_base = public_base

    def _resolve(self, bucket: str, path: str) -> Path:
        base = (self.root / bucket).resolve()
        target = (base / path.lstrip("/")).resolve()
        if base != target and base not in target.parents:
            raise ValueError(f"Path escapes bucket: {path!r}")
        return target

    def store(self, bucket: str, path: str, data: bytes, content_type: str) -> None:
        target = self._resolve(bucket, path)
        os.makedirs(target.parent, exist_ok=True)
        with open(target, "wb") as f:
            f.write(data)

    def public_url(self, bucket: str, path: str) -> str:
        target = self._resolve(bucket, path)
        if not target.exists():
            raise FileNotFoundError(str(target))
        rel = f"{UPLOADS_URL_PREFIX}/{bucket}/{path.lstrip('/')}"
        return join_public_url(rel, self.public_base)
