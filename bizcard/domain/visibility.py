"""Public visibility gate for saved cards."""
from __future__ import annotations

from typing import Optional, Protocol

from bizcard.core.urls import join_public_url

PUBLIC_PATH_PREFIX = "/c/"


class _Publishable(Protocol):
    card_id: Optional[str]
    is_published: bool


def is_publicly_viewable(card: _Publishable | None) -> bool:
    if card is None:
        return False
    return bool(card.card_id) and card.is_published is True


def public_url(card: _Publishable | None, *, absolute: bool = False) -> Optional[str]:
    """Path of the public view (`/c/{id}`), or None while not viewable."""
    if not is_publicly_viewable(card):
        return None
    path = f"{PUBLIC_PATH_PREFIX}{card.card_id}"
    return join_public_url(path) if absolute else path
