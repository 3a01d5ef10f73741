"""
Persistence gateway between the card draft and the SQL store.

Decides insert vs. update on commit, loads the owner's card with its links
and creates/deletes link rows one at a time.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from bizcard.db.models import BusinessCard, SocialLink
from bizcard.domain.card import CardRecord, SocialLinkRecord
from bizcard.domain.theme import CardShape, Layout, Theme
from bizcard.repositories.sql_repository import SQLRepository
from bizcard.services.errors import (
    CardNotSavedError,
    DuplicateCardError,
    EmptyUsernameError,
    RemoteFailure,
)

logger = logging.getLogger(__name__)


def _entity_to_record(entity: BusinessCard, fallback_email: str = "") -> CardRecord:
    try:
        shape = CardShape(entity.shape or CardShape.RECTANGLE.value)
    except ValueError:
        shape = CardShape.RECTANGLE
    return CardRecord(
        card_id=entity.id,
        user_id=entity.user_id,
        title=entity.title or "",
        company=entity.company or "",
        phone=entity.phone or "",
        email=entity.email or fallback_email or "",
        website=entity.website or "",
        avatar_url=entity.avatar_url or "",
        theme=Theme.from_dict(entity.theme),
        shape=shape,
        layout=Layout.from_dict(entity.layout),
        is_published=bool(entity.is_published),
    )


def _entity_to_link(entity: SocialLink) -> SocialLinkRecord:
    return SocialLinkRecord(
        link_id=entity.id,
        card_id=entity.card_id,
        platform=entity.platform or "",
        username=entity.username or "",
        url=entity.url or "",
    )


class CardGateway:
    """Loads and commits the single card owned by a user."""

    def __init__(self, repository: SQLRepository | None = None) -> None:
        self.repository = repository or SQLRepository()

    def load(self, user_id: str, fallback_email: str = "") -> Tuple[Optional[CardRecord], list[SocialLinkRecord]]:
        """
        Return the owner's card and its links, or (None, []) when there is no
        card yet. More than one card row for the owner is a DuplicateCardError.
        """
        try:
            entities = self.repository.get_cards_by_owner(user_id)
            if not entities:
                return None, []
            if len(entities) > 1:
                raise DuplicateCardError(f"{len(entities)} cards found for owner {user_id}")
            card = _entity_to_record(entities[0], fallback_email)
            links = [_entity_to_link(link) for link in self.repository.list_social_links(card.card_id)]
        except SQLAlchemyError as exc:
            logger.error("Error loading business card for %s: %s", user_id, exc)
            raise RemoteFailure("Could not load business card") from exc
        return card, links

    def commit(self, draft: CardRecord, user_id: str) -> CardRecord:
        """
        Insert the draft when it has no identifier, otherwise update the row
        with that identifier. The owner is taken from `user_id` on insert and
        never rewritten on update.
        """
        values = draft.to_row()
        try:
            if draft.is_pending:
                entity = self.repository.insert_card(user_id, values)
                logger.info("Created business card %s for %s", entity.id, user_id)
            else:
                entity = self.repository.update_card(draft.card_id, user_id, values)
                if entity is None:
                    raise RemoteFailure(f"Card {draft.card_id} not found for owner {user_id}")
                logger.info("Updated business card %s", entity.id)
        except IntegrityError as exc:
            logger.error("Business card for %s violates a store constraint: %s", user_id, exc)
            raise RemoteFailure("Business card already exists for this user") from exc
        except SQLAlchemyError as exc:
            logger.error("Error saving business card for %s: %s", user_id, exc)
            raise RemoteFailure("Could not save business card") from exc
        return _entity_to_record(entity)

    def add_link(self, card_id: Optional[str], platform: str, username: str, url: str) -> SocialLinkRecord:
        if not card_id:
            raise CardNotSavedError("Save the card before adding social links")
        if not (username or "").strip():
            raise EmptyUsernameError("Username is required")
        try:
            entity = self.repository.insert_social_link(card_id, platform, username, url)
        except SQLAlchemyError as exc:
            logger.error("Error adding social link to %s: %s", card_id, exc)
            raise RemoteFailure("Could not add social link") from exc
        return _entity_to_link(entity)

    def remove_link(self, card_id: Optional[str], link_id: str) -> None:
        if not card_id:
            raise CardNotSavedError("Card has no identifier")
        try:
            removed = self.repository.delete_social_link(card_id, link_id)
        except SQLAlchemyError as exc:
            logger.error("Error removing social link %s: %s", link_id, exc)
            raise RemoteFailure("Could not remove social link") from exc
        if not removed:
            logger.debug("Social link %s was already gone", link_id)

    def get_public_card(self, card_id: str) -> Tuple[Optional[CardRecord], list[SocialLinkRecord]]:
        try:
            entity = self.repository.get_card(card_id)
            if not entity:
                return None, []
            links = [_entity_to_link(link) for link in self.repository.list_social_links(card_id)]
        except SQLAlchemyError as exc:
            logger.error("Error loading public card %s: %s", card_id, exc)
            raise RemoteFailure("Could not load card") from exc
        return _entity_to_record(entity), links
