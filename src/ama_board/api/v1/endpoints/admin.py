"""Host console endpoints for managing every event."""

from fastapi import APIRouter

from ama_board.api.v1.dependencies import IsHostDep, SessionDep
from ama_board.models import Event
from ama_board.schemas.event import AdminEventUpdate, EventResponse, EventSummaryResponse
from ama_board.services import events as event_service
from ama_board.services.errors import require_host

from .events import to_summary_response

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/events", response_model=list[EventSummaryResponse])
async def list_all_events(db: SessionDep, is_host: IsHostDep) -> list[EventSummaryResponse]:
    """List all events, including inactive and closed ones."""
    return [to_summary_response(s) for s in event_service.list_all_events(db, is_host=is_host)]


@router.patch("/events/{event_id}", response_model=EventResponse)
async def admin_update_event(
    event_id: int,
    payload: AdminEventUpdate,
    db: SessionDep,
    is_host: IsHostDep,
) -> Event:
    """Apply only the fields present in the body."""
    changes = payload.model_dump(include=payload.model_fields_set)
    event = event_service.admin_update_event(db, event_id, changes, is_host=is_host)
    db.commit()
    db.refresh(event)
    return event


@router.delete("/events/{event_id}")
async def admin_delete_event(
    event_id: int, db: SessionDep, is_host: IsHostDep
) -> dict[str, bool]:
    """Permanently delete any event."""
    require_host(is_host)
    event_service.delete_event(db, event_id, is_host=True)
    db.commit()
    return {"success": True}
