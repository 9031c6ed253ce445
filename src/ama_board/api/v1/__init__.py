# src/ama_board/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    admin_router,
    auth_router,
    events_router,
    questions_router,
    system_router,
    votes_router,
)

__all__ = [
    "admin_router",
    "auth_router",
    "events_router",
    "questions_router",
    "system_router",
    "votes_router",
]
