"""SQLAlchemy engine and session factory for the card store."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from functools import lru_cache
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from bizcard.core.config import get_settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def _engine_options(url: str) -> dict:
    # sessions are opened from threadpool workers, so sqlite must allow that
    if make_url(url).get_backend_name() == "sqlite":
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


@lru_cache
def get_engine() -> Engine:
    url = (get_settings().database_url or "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL must be configured for the card store.")
    logger.info("Card store at %s", make_url(url).render_as_string(hide_password=True))
    return create_engine(url, **_engine_options(url))


@lru_cache
def _get_sessionmaker() -> sessionmaker:
    return sessionmaker(bind=get_engine(), autoflush=False)


@contextmanager
def get_session() -> Iterator[Session]:
    with _get_sessionmaker()() as session:
        yield session
