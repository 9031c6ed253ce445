# src/ama_board/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .admin import router as admin_router
from .auth import router as auth_router
from .events import router as events_router
from .questions import router as questions_router
from .system import router as system_router
from .votes import router as votes_router

__all__ = [
    "admin_router",
    "auth_router",
    "events_router",
    "questions_router",
    "system_router",
    "votes_router",
]
