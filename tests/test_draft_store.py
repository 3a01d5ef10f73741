from __future__ import annotations

import pytest

from bizcard.domain.card import CardField, CardRecord, SocialLinkRecord
from bizcard.domain.theme import CardShape, Layout, LayoutKey, Theme, ThemeColor
from bizcard.services.draft_store import CardDraftStore
from bizcard.services.errors import InvalidShapeError, InvalidThemeValueError


def _link(link_id: str, card_id: str = "c1") -> SocialLinkRecord:
    return SocialLinkRecord(link_id=link_id, card_id=card_id, platform="GitHub", username=link_id, url=f"https://github.com/{link_id}")


def test_new_user_gets_default_draft():
    store = CardDraftStore(user_id="u1")
    draft = store.draft
    assert draft.card_id is None
    assert draft.theme.to_dict() == {
        "primary": "#3B82F6",
        "secondary": "#1E40AF",
        "background": "#FFFFFF",
        "text": "#1F2937",
    }
    assert draft.shape is CardShape.RECTANGLE
    assert (draft.title, draft.company, draft.phone, draft.website, draft.avatar_url) == ("", "", "", "", "")
    assert draft.is_published is False
    assert store.links == []


def test_email_prefilled_from_identity():
    assert CardDraftStore(user_id="u1", email="alice@example.com").draft.email == "alice@example.com"


def test_set_field_accepts_only_card_fields():
    store = CardDraftStore(user_id="u1")
    store.set_field(CardField.COMPANY, "Acme")
    assert store.draft.company == "Acme"
    with pytest.raises(TypeError):
        store.set_field("company", "Other")
    with pytest.raises(ValueError):
        CardField("user_id")
    assert store.draft.company == "Acme"


def test_theme_and_layout_updates_merge():
    store = CardDraftStore(user_id="u1")
    store.set_theme(ThemeColor.PRIMARY, "#000000")
    store.set_layout(LayoutKey.STYLE, "minimal")
    store.set_field(CardField.TITLE, "Alice")
    assert store.draft.theme == Theme(primary="#000000")
    assert store.draft.layout == Layout(style="minimal")


def test_replace_theme_and_layout_swap_whole_substructure():
    store = CardDraftStore(user_id="u1")
    store.replace_theme(Theme().with_color(ThemeColor.PRIMARY, "#000000").with_color(ThemeColor.TEXT, "#111111"))
    store.replace_layout(Layout(alignment="left"))
    assert store.draft.theme == Theme(primary="#000000", text="#111111")
    assert store.draft.layout.alignment == "left"
    with pytest.raises(TypeError):
        store.replace_theme({"primary": "#000000"})


def test_invalid_values_leave_draft_unchanged():
    store = CardDraftStore(user_id="u1")
    before = store.snapshot()
    with pytest.raises(InvalidThemeValueError):
        store.set_theme(ThemeColor.TEXT, "black")
    with pytest.raises(InvalidShapeError):
        store.set_shape("star")
    assert store.snapshot() == before


def test_snapshot_is_not_affected_by_later_edits():
    store = CardDraftStore(user_id="u1")
    snap = store.snapshot()
    store.set_published(True)
    assert snap.is_published is False
    assert store.draft.is_published is True


def test_load_from_twice_keeps_second_input():
    store = CardDraftStore(user_id="u1")
    first = CardRecord(card_id="c1", user_id="u1", title="First", is_published=True)
    second = CardRecord(card_id="c1", user_id="u1", company="Second")
    store.load_from(first, [_link("a"), _link("b")])
    store.load_from(second, [_link("c")])
    assert store.draft == second
    assert [link.link_id for link in store.links] == ["c"]


def test_add_and_remove_links():
    store = CardDraftStore(user_id="u1")
    store.add_link(_link("a"))
    store.add_link(_link("b"))
    store.add_link(_link("b2"))
    assert store.remove_link("b").link_id == "b"
    assert store.remove_link("missing") is None
    assert [link.link_id for link in store.links] == ["a", "b2"]


def test_reset_drops_identifier_and_links():
    store = CardDraftStore(user_id="u1")
    store.load_from(CardRecord(card_id="c1", user_id="u1", title="Alice"), [_link("a")])
    store.reset("u1", "alice@example.com")
    assert store.draft == CardRecord(user_id="u1", email="alice@example.com")
    assert store.links == []
