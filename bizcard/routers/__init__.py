"""
FastAPI routers grouped by concern (auth, editor, public cards).

Each module exposes an APIRouter included by the application factory.
"""
