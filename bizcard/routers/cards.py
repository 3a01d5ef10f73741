from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request
from fastapi.concurrency import run_in_threadpool

from bizcard.domain.visibility import is_publicly_viewable
from bizcard.services.card_preview import build_preview
from bizcard.services.errors import RemoteFailure

router = APIRouter(tags=["cards"])


@router.get("/c/{card_id}")
async def public_card(card_id: str, request: Request):
    gateway = request.app.state.editor_registry.gateway
    try:
        card, links = await run_in_threadpool(gateway.get_public_card, card_id)
    except RemoteFailure as exc:
        raise HTTPException(502, str(exc))
    if not is_publicly_viewable(card):
        raise HTTPException(404, "Card not found")
    return build_preview(card, links, absolute_public_url=True)
