"""
Per-user editing session.

Draft mutations happen on the event loop; database and storage work runs in
the threadpool and is awaited. The `saving` and `uploading` flags are set on
the loop before the first await and are advisory: routers refuse a second
request while one is set, the gateway itself does not lock.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi.concurrency import run_in_threadpool

from bizcard.domain.card import CardField, CardRecord, SocialLinkRecord
from bizcard.domain.social import NewLinkForm
from bizcard.repositories.blob_storage import BlobStorage
from bizcard.services.card_gateway import CardGateway
from bizcard.services.draft_store import CardDraftStore
from bizcard.services.errors import RemoteFailure
from bizcard.services.upload_service import AvatarUploader

logger = logging.getLogger(__name__)


class EditorSession:
    def __init__(self, user_id: str, email: str, gateway: CardGateway, uploader: AvatarUploader) -> None:
        self.user_id = user_id
        self.email = email
        self.gateway = gateway
        self.uploader = uploader
        self.store = CardDraftStore(user_id=user_id, email=email)
        self.link_form = NewLinkForm()
        self.saving = False
        self.uploading = False
        self.loaded = False
        self._load_seq = 0

    async def load(self) -> bool:
        """
        Pull the stored card into the draft. Only the most recently started
        load may apply its result; a response that arrives after a newer load
        began is dropped and False is returned.
        """
        self._load_seq += 1
        ticket = self._load_seq
        try:
            card, links = await run_in_threadpool(self.gateway.load, self.user_id, self.email)
        except RemoteFailure:
            if ticket == self._load_seq:
                self.store.reset(self.user_id, self.email)
                self.loaded = True
            raise
        if ticket != self._load_seq:
            logger.info("Discarding stale card load for %s (ticket %s < %s)", self.user_id, ticket, self._load_seq)
            return False
        if card is None:
            self.store.reset(self.user_id, self.email)
        else:
            self.store.load_from(card, links)
        self.loaded = True
        return True

    async def save(self) -> CardRecord:
        self.saving = True
        try:
            record = await run_in_threadpool(self.gateway.commit, self.store.snapshot(), self.user_id)
        finally:
            self.saving = False
        if self.store.draft.card_id != record.card_id:
            self.store.assign_identifier(record.card_id)
        return record

    async def add_link(self) -> SocialLinkRecord:
        form = self.link_form
        link = await run_in_threadpool(
            self.gateway.add_link,
            self.store.draft.card_id,
            form.platform,
            form.username,
            form.url,
        )
        self.store.add_link(link)
        form.reset()
        return link

    async def remove_link(self, link_id: str) -> None:
        await run_in_threadpool(self.gateway.remove_link, self.store.draft.card_id, link_id)
        self.store.remove_link(link_id)

    async def upload_avatar(self, filename: str, content_type: Optional[str], data: bytes) -> str:
        self.uploading = True
        try:
            url = await run_in_threadpool(self.uploader.upload, self.user_id, filename, content_type, data)
        finally:
            self.uploading = False
        self.store.set_field(CardField.AVATAR_URL, url)
        return url


class EditorRegistry:
    """In-process map of user id to EditorSession."""

    def __init__(self, gateway: CardGateway | None = None, storage: BlobStorage | None = None) -> None:
        self.gateway = gateway or CardGateway()
        self.storage = storage
        self._sessions: dict[str, EditorSession] = {}

    def get(self, user_id: str, email: str = "") -> EditorSession:
        session = self._sessions.get(user_id)
        if session is None:
            session = EditorSession(user_id, email, self.gateway, AvatarUploader(self.storage))
            self._sessions[user_id] = session
        return session

    def discard(self, user_id: str) -> None:
        self._sessions.pop(user_id, None)
