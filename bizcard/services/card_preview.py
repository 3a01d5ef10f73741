"""Read-only projection of a card for the editor preview and public route."""
from __future__ import annotations

from typing import Iterable

from bizcard.domain.card import CardRecord, SocialLinkRecord
from bizcard.domain.visibility import is_publicly_viewable, public_url

GOOGLE_FONTS_CSS = "https://fonts.googleapis.com/css2?family={family}:wght@300;400;500;600;700&display=swap"


def font_stylesheet_url(font: str) -> str:
    return GOOGLE_FONTS_CSS.format(family=(font or "").replace(" ", "+"))


def build_preview(card: CardRecord, links: Iterable[SocialLinkRecord], *, absolute_public_url: bool = False) -> dict:
    return {
        "id": card.card_id,
        "title": card.title,
        "company": card.company,
        "phone": card.phone,
        "email": card.email,
        "website": card.website,
        "avatar_url": card.avatar_url,
        "theme": card.theme.to_dict(),
        "shape": card.shape.value,
        "layout": card.layout.to_dict(),
        "font_css": font_stylesheet_url(card.layout.font),
        "is_published": card.is_published,
        "is_public": is_publicly_viewable(card),
        "public_url": public_url(card, absolute=absolute_public_url),
        "social_links": [link.to_dict() for link in links],
    }
