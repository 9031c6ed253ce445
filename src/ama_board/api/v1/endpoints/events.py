"""Event and board endpoints for the AMA Board API."""

from fastapi import APIRouter, Query, status

from ama_board.api.v1.dependencies import IsHostDep, SessionDep, VoterDep
from ama_board.models import Event
from ama_board.schemas.event import (
    EventCreate,
    EventResponse,
    EventSummaryResponse,
    EventUpdate,
)
from ama_board.schemas.question import BoardResponse, QuestionCreate, QuestionViewResponse
from ama_board.services import events as event_service
from ama_board.services.board import list_questions
from ama_board.services.events import EventSummary
from ama_board.services.questions import submit_question
from ama_board.services.ranking import SortMode, build_view

router = APIRouter(prefix="/events", tags=["events"])


def to_summary_response(summary: EventSummary) -> EventSummaryResponse:
    """Merge an event and its counts into one response model."""
    base = EventResponse.model_validate(summary.event).model_dump()
    return EventSummaryResponse(
        **base,
        question_count=summary.question_count,
        vote_count=summary.vote_count,
    )


@router.get("/", response_model=list[EventResponse])
async def list_events(db: SessionDep) -> list[Event]:
    """List active events in start-time order."""
    return event_service.list_active_events(db)


@router.get("/past", response_model=list[EventSummaryResponse])
async def list_past_events(db: SessionDep) -> list[EventSummaryResponse]:
    """List closed events with counts of their visible questions and votes."""
    return [to_summary_response(s) for s in event_service.list_past_events(db)]


@router.post("/", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    payload: EventCreate,
    db: SessionDep,
    voter: VoterDep,
    is_host: IsHostDep,
) -> Event:
    """Create an event; only hosts may create company events."""
    event = event_service.create_event(
        db,
        title=payload.title,
        starts_at=payload.starts_at,
        event_type=payload.type,
        host_name=payload.host_name,
        description=payload.description,
        is_host=is_host,
        created_by_voter_id=voter.voter_id,
    )
    db.commit()
    db.refresh(event)
    return event


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(event_id: int, db: SessionDep) -> Event:
    """Get a single event."""
    return event_service.get_event_or_404(db, event_id)


@router.patch("/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: int,
    payload: EventUpdate,
    db: SessionDep,
    is_host: IsHostDep,
) -> Event:
    """Edit or close a team event.

    A body of just `{"status": "CLOSED"}` closes the event without requiring
    the other fields.
    """
    if payload.status == "CLOSED":
        event = event_service.close_event(db, event_id, is_host=is_host)
    else:
        event = event_service.update_event(
            db,
            event_id,
            title=payload.title,
            starts_at=payload.starts_at,
            host_name=payload.host_name,
            description=payload.description,
            is_voting_open=payload.is_voting_open,
            is_host=is_host,
        )
    db.commit()
    db.refresh(event)
    return event


@router.delete("/{event_id}")
async def delete_event(event_id: int, db: SessionDep, is_host: IsHostDep) -> dict[str, bool]:
    """Delete a team event with all of its questions and votes."""
    event_service.delete_event(db, event_id, is_host=is_host)
    db.commit()
    return {"success": True}


@router.get("/{event_id}/questions", response_model=BoardResponse)
async def get_board(
    event_id: int,
    db: SessionDep,
    voter: VoterDep,
    is_host: IsHostDep,
    sort: SortMode = Query(SortMode.SCORE, description="score or newest"),
) -> BoardResponse:
    """Return the ranked board for the caller.

    Public callers see open, unhidden questions; hosts see everything.
    """
    snapshot = list_questions(
        db,
        event_id,
        sort_mode=sort,
        voter_id=voter.voter_id,
        is_host=is_host,
    )
    return BoardResponse.model_validate(snapshot, from_attributes=True)


@router.post(
    "/{event_id}/questions",
    response_model=QuestionViewResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_question(
    event_id: int,
    payload: QuestionCreate,
    db: SessionDep,
    voter: VoterDep,
) -> QuestionViewResponse:
    """Submit a question, attributed to the caller's voter id."""
    question = submit_question(
        db,
        event_id=event_id,
        text=payload.text,
        submitted_name=payload.submitted_name,
        is_anonymous=payload.is_anonymous,
        submitter_id=voter.voter_id,
    )
    db.commit()
    view = build_view(question, (), caller_voter_id=voter.voter_id, now=question.created_at)
    return QuestionViewResponse.model_validate(view, from_attributes=True)
