"""
Authentication use cases for the built-in identity provider.

The card core only consumes the resulting user id and email; everything here
exists so the HTTP surface can establish who the current user is.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import IntegrityError

from bizcard.core.security import hash_password, verify_password
from bizcard.repositories.sql_repository import SQLRepository
from bizcard.services.session_service import delete_session, issue_session

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")
MIN_PASSWORD_LENGTH = 8


class AuthError(Exception):
    """Base class for authentication-related exceptions."""


class RegistrationError(AuthError):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AccountExistsError(AuthError):
    pass


class InvalidCredentialsError(AuthError):
    pass


@dataclass
class LoginSuccess:
    user_id: str
    email: str
    session_token: str


@dataclass
class AuthService:
    """Handles registration, login and logout."""

    repository: Optional[SQLRepository] = None

    def __post_init__(self):
        if self.repository is None:
            self.repository = SQLRepository()

    def register(self, email: str, password: str) -> LoginSuccess:
        raw_email = (email or "").strip().lower()
        if not EMAIL_RE.fullmatch(raw_email):
            raise RegistrationError("A valid email is required")
        if len(password or "") < MIN_PASSWORD_LENGTH:
            raise RegistrationError(f"Password too short. Use at least {MIN_PASSWORD_LENGTH} characters")
        if self.repository.get_user_by_email(raw_email):
            raise AccountExistsError("Account already exists")
        try:
            user = self.repository.create_user(raw_email, hash_password(password))
        except IntegrityError as exc:
            raise AccountExistsError("Account already exists") from exc
        logger.info("Registered user %s", user.id)
        return LoginSuccess(user_id=user.id, email=user.email, session_token=issue_session(user.id))

    def login(self, email: str, password: str) -> LoginSuccess:
        raw_email = (email or "").strip().lower()
        if not raw_email:
            raise InvalidCredentialsError("Invalid credentials")
        user = self.repository.get_user_by_email(raw_email)
        if not user or not verify_password(password, user.password_hash):
            raise InvalidCredentialsError("Invalid credentials")
        return LoginSuccess(user_id=user.id, email=user.email, session_token=issue_session(user.id))

    def logout(self, session_token: Optional[str]):
        if not session_token:
            return
        delete_session(session_token)
