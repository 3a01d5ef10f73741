"""Session helpers (issue tokens, cookies, validation)."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Request, Response

from bizcard.core.config import get_settings
from bizcard.db.models import User, UserSession
from bizcard.db.session import get_session
from bizcard.repositories.sql_repository import SQLRepository

SESSION_COOKIE_NAME = "session"


@dataclass(frozen=True)
class CurrentUser:
    """What the core consumes from the identity provider."""

    user_id: str
    email: str


def issue_session(user_id: str) -> str:
    """Create a new session token and persist it in the SQL store."""
    settings = get_settings()
    ttl = max(60, settings.session_ttl_seconds)
    expires_at = datetime.now(timezone.utc) + timedelta(seconds=ttl)
    return SQLRepository().create_user_session(user_id, expires_at)


def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def current_user(request: Request) -> Optional[CurrentUser]:
    """Return the user behind the current session cookie, if any."""
    token = request.cookies.get(SESSION_COOKIE_NAME)
    if not token:
        return None

    now = datetime.now(timezone.utc)
    with get_session() as session:
        db_session = session.get(UserSession, token)
        if not db_session:
            return None
        if db_session.expires_at and _as_utc(db_session.expires_at) < now:
            session.delete(db_session)
            session.commit()
            return None
        user = session.get(User, db_session.user_id)
        if not user:
            return None
        return CurrentUser(user_id=user.id, email=user.email)


def set_session_cookie(response: Response, token: str) -> None:
    settings = get_settings()
    secure_cookie = settings.app_env == "prod"
    response.set_cookie(
        SESSION_COOKIE_NAME,
        token,
        httponly=True,
        secure=secure_cookie,
        samesite="strict",
        max_age=settings.session_ttl_seconds,
        path="/",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(SESSION_COOKIE_NAME, path="/")


def delete_session(token: str) -> None:
    """Remove a session token from the store."""
    if not token:
        return
    SQLRepository().delete_user_session(token)
