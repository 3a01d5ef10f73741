"""High-level data access helpers backed by SQLAlchemy."""
from __future__ import annotations

import secrets
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select, update, delete

from bizcard.db.models import BusinessCard, SocialLink, User, UserSession
from bizcard.db.session import get_session


class SQLRepository:
    """CRUD helpers wrapping the SQLAlchemy session."""

    # -------------------------- users --------------------------
    def get_user_by_email(self, email: str) -> Optional[User]:
        with get_session() as session:
            stmt = select(User).where(User.email == email)
            return session.execute(stmt).scalar_one_or_none()

    def create_user(self, email: str, password_hash: str) -> User:
        entity = User(email=email, password_hash=password_hash, created_at=datetime.now(timezone.utc))
        with get_session() as session:
            session.add(entity)
            session.commit()
            session.refresh(entity)
            return entity

    # -------------------------- sessions --------------------------
    def create_user_session(self, user_id: str, expires_at: datetime) -> str:
        token = secrets.token_urlsafe(32)
        entity = UserSession(token=token, user_id=user_id, expires_at=expires_at)
        with get_session() as session:
            session.add(entity)
            session.commit()
        return token

    def get_user_session(self, token: str) -> Optional[UserSession]:
        with get_session() as session:
            return session.get(UserSession, token)

    def delete_user_session(self, token: str) -> None:
        with get_session() as session:
            session.execute(delete(UserSession).where(UserSession.token == token))
            session.commit()

    # -------------------------- cards --------------------------
    def get_card(self, card_id: str) -> Optional[BusinessCard]:
        with get_session() as session:
            return session.get(BusinessCard, card_id)

    def get_cards_by_owner(self, user_id: str) -> list[BusinessCard]:
        with get_session() as session:
            stmt = select(BusinessCard).where(BusinessCard.user_id == user_id)
            return session.execute(stmt).scalars().all()

    def insert_card(self, user_id: str, values: dict) -> BusinessCard:
        now = datetime.now(timezone.utc)
        entity = BusinessCard(user_id=user_id, created_at=now, updated_at=now, **values)
        with get_session() as session:
            session.add(entity)
            session.commit()
            session.refresh(entity)
            return entity

    def update_card(self, card_id: str, user_id: str, values: dict) -> Optional[BusinessCard]:
        """Update a card owned by `user_id`; returns None when no row matched."""
        with get_session() as session:
            stmt = (
                update(BusinessCard)
                .where(BusinessCard.id == card_id, BusinessCard.user_id == user_id)
                .values(updated_at=datetime.now(timezone.utc), **values)
            )
            result = session.execute(stmt)
            session.commit()
            if not result.rowcount:
                return None
            return session.get(BusinessCard, card_id)

    # -------------------------- social links --------------------------
    def list_social_links(self, card_id: str) -> list[SocialLink]:
        with get_session() as session:
            stmt = (
                select(SocialLink)
                .where(SocialLink.card_id == card_id)
                .order_by(SocialLink.created_at, SocialLink.id)
            )
            return session.execute(stmt).scalars().all()

    def insert_social_link(self, card_id: str, platform: str, username: str, url: str) -> SocialLink:
        entity = SocialLink(
            card_id=card_id,
            platform=platform,
            username=username,
            url=url,
            created_at=datetime.now(timezone.utc),
        )
        with get_session() as session:
            session.add(entity)
            session.commit()
            session.refresh(entity)
            return entity

    def delete_social_link(self, card_id: str, link_id: str) -> int:
        with get_session() as session:
            result = session.execute(
                delete(SocialLink).where(SocialLink.id == link_id, SocialLink.card_id == card_id)
            )
            session.commit()
            return int(result.rowcount or 0)
