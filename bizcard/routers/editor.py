from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile

from bizcard.domain.card import CardField
from bizcard.domain.theme import LayoutKey, ThemeColor
from bizcard.schemas.editor_schema import FieldsIn, LayoutIn, LinkFormIn, PublishedIn, ShapeIn, ThemeIn
from bizcard.services.card_preview import build_preview
from bizcard.services.editor_service import EditorRegistry, EditorSession
from bizcard.services.errors import CardError, RemoteFailure, UploadFailure, ValidationGap
from bizcard.services.session_service import CurrentUser, current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/editor", tags=["editor"])


def require_user(request: Request) -> CurrentUser:
    user = current_user(request)
    if not user:
        raise HTTPException(401, "Not authenticated")
    return user


def _registry(request: Request) -> EditorRegistry:
    registry = getattr(getattr(request.app, "state", None), "editor_registry", None)
    if registry:
        return registry
    raise RuntimeError("Editor registry not configured")


def _http_error(exc: CardError) -> HTTPException:
    if isinstance(exc, (ValidationGap, UploadFailure)):
        return HTTPException(400, str(exc))
    if isinstance(exc, RemoteFailure):
        return HTTPException(502, str(exc))
    return HTTPException(500, str(exc))


async def _session(request: Request, user: CurrentUser = Depends(require_user)) -> EditorSession:
    session = _registry(request).get(user.user_id, user.email)
    if not session.loaded:
        try:
            await session.load()
        except RemoteFailure as exc:
            logger.warning("Editor for %s opened with an empty draft: %s", user.user_id, exc)
    return session


def _state(session: EditorSession) -> dict:
    form = session.link_form
    return {
        "card": build_preview(session.store.draft, session.store.links),
        "link_form": {"platform": form.platform, "username": form.username, "url": form.url},
        "saving": session.saving,
        "uploading": session.uploading,
    }


@router.post("/load")
async def load_editor(request: Request, user: CurrentUser = Depends(require_user)):
    session = _registry(request).get(user.user_id, user.email)
    try:
        await session.load()
    except RemoteFailure as exc:
        raise _http_error(exc)
    return _state(session)


@router.get("")
async def get_editor(session: EditorSession = Depends(_session)):
    return _state(session)


@router.patch("/fields")
async def update_fields(payload: FieldsIn, session: EditorSession = Depends(_session)):
    for name, value in payload.model_dump(exclude_none=True).items():
        session.store.set_field(CardField(name), value)
    return _state(session)


@router.patch("/theme")
async def update_theme(payload: ThemeIn, session: EditorSession = Depends(_session)):
    theme = session.store.draft.theme
    try:
        for name, value in payload.model_dump(exclude_none=True).items():
            theme = theme.with_color(ThemeColor(name), value)
    except ValidationGap as exc:
        raise _http_error(exc)
    session.store.replace_theme(theme)
    return _state(session)


@router.patch("/layout")
async def update_layout(payload: LayoutIn, session: EditorSession = Depends(_session)):
    layout = session.store.draft.layout
    try:
        for name, value in payload.model_dump(exclude_none=True).items():
            layout = layout.with_value(LayoutKey(name), value)
    except ValidationGap as exc:
        raise _http_error(exc)
    session.store.replace_layout(layout)
    return _state(session)


@router.put("/shape")
async def update_shape(payload: ShapeIn, session: EditorSession = Depends(_session)):
    try:
        session.store.set_shape(payload.shape)
    except ValidationGap as exc:
        raise _http_error(exc)
    return _state(session)


@router.put("/published")
async def update_published(payload: PublishedIn, session: EditorSession = Depends(_session)):
    session.store.set_published(payload.published)
    return _state(session)


@router.post("/save")
async def save_card(session: EditorSession = Depends(_session)):
    if session.saving:
        raise HTTPException(409, "A save is already in progress")
    try:
        await session.save()
    except CardError as exc:
        raise _http_error(exc)
    return _state(session)


@router.patch("/link-form")
async def update_link_form(payload: LinkFormIn, session: EditorSession = Depends(_session)):
    form = session.link_form
    if payload.platform is not None:
        form.set_platform(payload.platform)
    if payload.username is not None:
        form.set_username(payload.username)
    if payload.url is not None:
        form.set_url(payload.url)
    return _state(session)


@router.post("/links")
async def add_link(session: EditorSession = Depends(_session)):
    try:
        await session.add_link()
    except CardError as exc:
        raise _http_error(exc)
    return _state(session)


@router.delete("/links/{link_id}")
async def remove_link(link_id: str, session: EditorSession = Depends(_session)):
    try:
        await session.remove_link(link_id)
    except CardError as exc:
        raise _http_error(exc)
    return _state(session)


@router.post("/avatar")
async def upload_avatar(photo: UploadFile = File(...), session: EditorSession = Depends(_session)):
    data = await photo.read()
    if session.uploading:
        raise HTTPException(409, "An upload is already in progress")
    try:
        await session.upload_avatar(photo.filename or "", photo.content_type, data)
    except UploadFailure as exc:
        raise _http_error(exc)
    return _state(session)
