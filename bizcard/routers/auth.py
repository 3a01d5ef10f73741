from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from bizcard.core.rate_limiter import throttle_auth
from bizcard.routers.editor import require_user
from bizcard.schemas.auth_schema import Credentials, UserOut
from bizcard.services.auth_service import (
    AccountExistsError,
    AuthService,
    InvalidCredentialsError,
    LoginSuccess,
    RegistrationError,
)
from bizcard.services.session_service import (
    SESSION_COOKIE_NAME,
    CurrentUser,
    clear_session_cookie,
    current_user,
    set_session_cookie,
)

router = APIRouter(prefix="/auth", tags=["auth"])
auth_service = AuthService()


def _logged_in(result: LoginSuccess, status_code: int = 200) -> JSONResponse:
    response = JSONResponse({"user_id": result.user_id, "email": result.email}, status_code=status_code)
    set_session_cookie(response, result.session_token)
    return response


@router.post("/register")
def register(payload: Credentials, request: Request):
    throttle_auth(request, "register")
    try:
        result = auth_service.register(payload.email, payload.password)
    except RegistrationError as exc:
        raise HTTPException(400, exc.message)
    except AccountExistsError:
        raise HTTPException(409, "Account already exists")
    return _logged_in(result, status_code=201)


@router.post("/login")
def login(payload: Credentials, request: Request):
    throttle_auth(request, "login")
    try:
        result = auth_service.login(payload.email, payload.password)
    except InvalidCredentialsError:
        raise HTTPException(401, "Invalid credentials")
    return _logged_in(result)


@router.post("/logout")
def logout(request: Request):
    user = current_user(request)
    auth_service.logout(request.cookies.get(SESSION_COOKIE_NAME))
    registry = getattr(request.app.state, "editor_registry", None)
    if user and registry:
        registry.discard(user.user_id)
    response = JSONResponse({"ok": True})
    clear_session_cookie(response)
    return response


@router.get("/me", response_model=UserOut)
def me(user: CurrentUser = Depends(require_user)):
    return UserOut(user_id=user.user_id, email=user.email)
