"""Card and social link records shared by the draft store and the gateway."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .theme import CardShape, Layout, Theme


class CardField(str, Enum):
    """Profile fields editable through CardDraftStore.set_field."""

    TITLE = "title"
    COMPANY = "company"
    PHONE = "phone"
    EMAIL = "email"
    WEBSITE = "website"
    AVATAR_URL = "avatar_url"


@dataclass(frozen=True)
class CardRecord:
    """A card draft; `card_id` is None until the first successful save."""

    card_id: Optional[str] = None
    user_id: str = ""
    title: str = ""
    company: str = ""
    phone: str = ""
    email: str = ""
    website: str = ""
    avatar_url: str = ""
    theme: Theme = field(default_factory=Theme)
    shape: CardShape = CardShape.RECTANGLE
    layout: Layout = field(default_factory=Layout)
    is_published: bool = False

    @property
    def is_pending(self) -> bool:
        return not self.card_id

    def to_row(self) -> dict:
        """Columns written on insert/update (never id or user_id)."""
        return {
            "title": self.title,
            "company": self.company,
            "phone": self.phone,
            "email": self.email,
            "website": self.website,
            "avatar_url": self.avatar_url,
            "theme": self.theme.to_dict(),
            "shape": self.shape.value,
            "layout": self.layout.to_dict(),
            "is_published": bool(self.is_published),
        }


@dataclass(frozen=True)
class SocialLinkRecord:
    link_id: str
    card_id: str
    platform: str
    username: str
    url: str

    def to_dict(self) -> dict:
        return {
            "id": self.link_id,
            "card_id": self.card_id,
            "platform": self.platform,
            "username": self.username,
            "url": self.url,
        }
