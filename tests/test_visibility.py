from __future__ import annotations

import pytest

from bizcard.domain.card import CardRecord
from bizcard.domain.visibility import is_publicly_viewable, public_url


@pytest.mark.parametrize(
    "card_id, published, expected",
    [
        (None, False, False),
        (None, True, False),
        ("c1", False, False),
        ("c1", True, True),
    ],
)
def test_viewable_only_when_saved_and_published(card_id, published, expected):
    card = CardRecord(card_id=card_id, is_published=published)
    assert is_publicly_viewable(card) is expected
    assert (public_url(card) is not None) is expected


def test_public_url_contains_identifier():
    card = CardRecord(card_id="c1", is_published=True)
    assert public_url(card) == "/c/c1"


def test_absolute_public_url(monkeypatch):
    from bizcard.core import config as core_config

    monkeypatch.setenv("PUBLIC_BASE_URL", "https://cards.example.com/")
    core_config.get_settings.cache_clear()
    try:
        card = CardRecord(card_id="c1", is_published=True)
        assert public_url(card, absolute=True) == "https://cards.example.com/c/c1"
    finally:
        core_config.get_settings.cache_clear()


def test_missing_card_is_not_viewable():
    assert is_publicly_viewable(None) is False
    assert public_url(None) is None
