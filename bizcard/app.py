import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.middleware.base import BaseHTTPMiddleware

from bizcard.core.config import get_settings
from bizcard.core.logging import configure_logging
from bizcard.db.create_tables import create_all
from bizcard.repositories.blob_storage import UPLOADS_URL_PREFIX, BlobStorage, LocalBlobStorage
from bizcard.routers import auth as auth_router
from bizcard.routers import cards as cards_router
from bizcard.routers import editor as editor_router
from bizcard.services.card_gateway import CardGateway
from bizcard.services.editor_service import EditorRegistry


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers (anti clickjacking, nosniff, referrer policy)."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer-when-downgrade")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


def create_app(*, storage: BlobStorage | None = None, create_tables: bool = False) -> FastAPI:
    """Factory compatible with `uvicorn --factory bizcard.app:create_app`."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Business Card Editor API")

    os.makedirs(settings.uploads_dir, exist_ok=True)
    app.mount(UPLOADS_URL_PREFIX, StaticFiles(directory=settings.uploads_dir), name="uploads")

    allowed_cors = {settings.public_base_url}
    if settings.app_env != "prod":
        allowed_cors.update(
            {
                "http://localhost:5173",
                "http://127.0.0.1:5173",
            }
        )
    allowed_cors = {origin for origin in allowed_cors if origin}
    if allowed_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=sorted(allowed_cors),
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )
    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")

    if create_tables:
        create_all()

    app.state.editor_registry = EditorRegistry(CardGateway(), storage or LocalBlobStorage(settings.uploads_dir))

    app.include_router(auth_router.router)
    app.include_router(editor_router.router)
    app.include_router(cards_router.router)
    return app
