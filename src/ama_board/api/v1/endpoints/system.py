"""Public client configuration endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from ama_board.core.settings import settings
from ama_board.services.ranking import SortMode

router = APIRouter(prefix="/system", tags=["system"])


@router.get("/config")
async def get_public_config() -> dict[str, object]:
    """Return the runtime settings polling clients need.

    Excludes secrets and connection strings.
    """
    return {
        "app": {
            "name": settings.app_name,
            "version": settings.app_version,
        },
        "questions": {
            "max_length": settings.question_max_length,
            "edit_window_seconds": settings.edit_window_seconds,
            "sort_modes": [mode.value for mode in SortMode],
        },
        "polling": {
            "participant_interval_seconds": settings.participant_poll_interval_seconds,
            "presenter_interval_seconds": settings.presenter_poll_intervals,
            "presenter_undo_seconds": settings.presenter_undo_seconds,
        },
        "voter_cookie": settings.voter_cookie_name,
    }
