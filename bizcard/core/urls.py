"""Links handed to clients: public card pages and stored avatars."""
from __future__ import annotations

from typing import Optional

from bizcard.core.config import get_settings

_ABSOLUTE_PREFIXES = ("http://", "https://")


def join_public_url(path: str, base: Optional[str] = None) -> str:
    """Prefix `path` with PUBLIC_BASE_URL (or `base`) unless it is already absolute."""
    if path.startswith(_ABSOLUTE_PREFIXES):
        return path
    root = (base or get_settings().public_base_url).rstrip("/")
    return f"{root}/{path.lstrip('/')}"
