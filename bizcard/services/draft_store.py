"""In-memory working draft of the user's card and its social links."""
from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Optional

from bizcard.domain.card import CardField, CardRecord, SocialLinkRecord
from bizcard.domain.theme import Layout, LayoutKey, Theme, ThemeColor, parse_shape


class CardDraftStore:
    """
    Holds the single editable draft plus its link list.

    Every operation is local and synchronous; nothing here touches the
    database. The draft itself is an immutable CardRecord that is swapped on
    each mutation, so `snapshot()` can be handed to other layers safely.
    Invalid values raise a ValidationGap and leave the draft untouched.
    """

    def __init__(self, user_id: str = "", email: str = "") -> None:
        self._draft = CardRecord(user_id=user_id, email=email)
        self._links: list[SocialLinkRecord] = []

    # -------------------------- reads --------------------------
    @property
    def draft(self) -> CardRecord:
        return self._draft

    @property
    def links(self) -> list[SocialLinkRecord]:
        return list(self._links)

    def snapshot(self) -> CardRecord:
        return self._draft

    # -------------------------- field edits --------------------------
    def set_field(self, field: CardField, value: str) -> None:
        if not isinstance(field, CardField):
            raise TypeError(f"Unknown card field: {field!r}")
        self._draft = replace(self._draft, **{field.value: value or ""})

    def set_theme(self, key: ThemeColor, value: str) -> None:
        self._draft = replace(self._draft, theme=self._draft.theme.with_color(key, value))

    def set_layout(self, key: LayoutKey, value: str) -> None:
        self._draft = replace(self._draft, layout=self._draft.layout.with_value(key, value))

    def replace_theme(self, theme: Theme) -> None:
        """Swap in a complete theme, e.g. one built from several `with_color` calls."""
        if not isinstance(theme, Theme):
            raise TypeError(f"Expected a Theme, got {theme!r}")
        self._draft = replace(self._draft, theme=theme)

    def replace_layout(self, layout: Layout) -> None:
        if not isinstance(layout, Layout):
            raise TypeError(f"Expected a Layout, got {layout!r}")
        self._draft = replace(self._draft, layout=layout)

    def set_shape(self, shape: str) -> None:
        self._draft = replace(self._draft, shape=parse_shape(shape))

    def set_published(self, published: bool) -> None:
        self._draft = replace(self._draft, is_published=bool(published))

    def assign_identifier(self, card_id: str) -> None:
        self._draft = replace(self._draft, card_id=card_id)

    # -------------------------- whole-draft --------------------------
    def load_from(self, record: CardRecord, links: Iterable[SocialLinkRecord]) -> None:
        """Replace the entire draft and link list (no merge with prior state)."""
        self._draft = record
        self._links = list(links)

    def reset(self, user_id: str, email: str = "") -> None:
        self.load_from(CardRecord(user_id=user_id, email=email), [])

    # -------------------------- links --------------------------
    def add_link(self, link: SocialLinkRecord) -> None:
        self._links.append(link)

    def remove_link(self, link_id: str) -> Optional[SocialLinkRecord]:
        for idx, link in enumerate(self._links):
            if link.link_id == link_id:
                return self._links.pop(idx)
        return None
