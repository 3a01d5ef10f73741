"""SQLAlchemy models for cards, social links and the built-in identity store.

business_cards.user_id is the opaque identity-provider id, so it carries no
foreign key to users.
"""
from __future__ import annotations

import uuid

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    String,
    Text,
    JSON,
    func,
)
from sqlalchemy.orm import relationship

from .session import Base


def _new_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_new_id)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class UserSession(Base):
    __tablename__ = "sessions"

    token = Column(String(128), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class BusinessCard(Base):
    __tablename__ = "business_cards"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(64), unique=True, nullable=False)
    title = Column(String(255), default="", nullable=False)
    company = Column(String(255), default="", nullable=False)
    phone = Column(String(64), default="", nullable=False)
    email = Column(String(255), default="", nullable=False)
    website = Column(String(512), default="", nullable=False)
    avatar_url = Column(Text, default="", nullable=False)
    theme = Column(JSON, default=dict, nullable=False)
    shape = Column(String(32), default="rectangle", nullable=False)
    layout = Column(JSON, default=dict, nullable=False)
    is_published = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    social_links = relationship("SocialLink", back_populates="card", cascade="all,delete-orphan")


class SocialLink(Base):
    __tablename__ = "social_links"

    id = Column(String(36), primary_key=True, default=_new_id)
    card_id = Column(String(36), ForeignKey("business_cards.id", ondelete="CASCADE"), nullable=False)
    platform = Column(String(64), nullable=False)
    username = Column(String(255), nullable=False)
    url = Column(Text, default="", nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    card = relationship("BusinessCard", back_populates="social_links")
