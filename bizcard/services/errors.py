"""Exceptions raised by the card editing workflow."""

from __future__ import annotations


class CardError(Exception):
    """Base exception for card editing workflow."""


class RemoteFailure(CardError):
    """Raised when the data store rejects a query or mutation."""


class DuplicateCardError(RemoteFailure):
    """Raised when more than one card row exists for a single owner."""


class UploadFailure(CardError):
    """Raised when an image cannot be stored or its public URL resolved."""


class ValidationGap(CardError):
    """Raised when input is rejected locally, before any remote call."""


class CardNotSavedError(ValidationGap):
    """Raised when an operation needs a card identifier that is not assigned yet."""


class EmptyUsernameError(ValidationGap):
    """Raised when adding a social link without a username."""


class InvalidThemeValueError(ValidationGap):
    pass


class InvalidLayoutValueError(ValidationGap):
    pass


class InvalidShapeError(ValidationGap):
    pass
