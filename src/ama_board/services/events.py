"""Event management services.

Team events are guest-managed: anyone holding the link may edit, close or
delete them. Company events are created and managed by the host only.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ama_board.models import Event, EventStatus, EventType, Question, QuestionVote
from ama_board.services.errors import (
    BoardValidationError,
    ForbiddenError,
    NotFoundError,
    require_host,
)

logger = logging.getLogger(__name__)

ADMIN_UPDATABLE_FIELDS = ("is_active", "is_voting_open", "title", "description", "starts_at")


@dataclass(frozen=True)
class EventSummary:
    """Event with its question and vote counts."""

    event: Event
    question_count: int
    vote_count: int = 0


def _clean(value: str | None) -> str | None:
    return (value or "").strip() or None


def get_event_or_404(db: Session, event_id: int) -> Event:
    """Return the event or raise NotFoundError."""
    event = db.get(Event, event_id)
    if event is None:
        raise NotFoundError("Event not found")
    return event


def create_event(
    db: Session,
    *,
    title: str | None,
    starts_at: datetime | None,
    event_type: EventType = EventType.TEAM,
    host_name: str | None = None,
    description: str | None = None,
    is_host: bool = False,
    created_by_voter_id: str | None = None,
) -> Event:
    """Create an event.

    Raises:
        ForbiddenError: If a non-host tries to create a company event.
        BoardValidationError: On a missing title, start time or team host name.
    """
    if event_type == EventType.COMPANY and not is_host:
        raise ForbiddenError("Only hosts can create company events")

    cleaned_title = _clean(title)
    if cleaned_title is None:
        raise BoardValidationError("Title is required")
    if starts_at is None:
        raise BoardValidationError("Event date/time is required")
    cleaned_host = _clean(host_name)
    if event_type == EventType.TEAM and cleaned_host is None:
        raise BoardValidationError("Host name is required for team events")

    event = Event(
        title=cleaned_title,
        description=_clean(description),
        starts_at=starts_at,
        type=event_type,
        host_name=cleaned_host if event_type == EventType.TEAM else None,
        created_by_voter_id=created_by_voter_id,
        is_active=True,
        is_voting_open=True,
        status=EventStatus.OPEN,
    )
    db.add(event)
    db.flush()
    logger.info("Created %s event %s", event_type.value, event.id)
    return event


def _require_team_or_host(event: Event, is_host: bool) -> None:
    if event.type != EventType.TEAM and not is_host:
        raise ForbiddenError("Only team events can be managed here")


def close_event(db: Session, event_id: int, *, is_host: bool = False) -> Event:
    """Close an event; voting and submissions stop and it moves to past events."""
    event = get_event_or_404(db, event_id)
    _require_team_or_host(event, is_host)
    event.status = EventStatus.CLOSED
    db.flush()
    logger.info("Closed event %s", event_id)
    return event


def update_event(
    db: Session,
    event_id: int,
    *,
    title: str | None,
    starts_at: datetime | None,
    host_name: str | None,
    description: str | None = None,
    is_voting_open: bool | None = None,
    is_host: bool = False,
) -> Event:
    """Edit a team event's details; hosts may also edit company events."""
    event = get_event_or_404(db, event_id)
    _require_team_or_host(event, is_host)

    cleaned_title = _clean(title)
    if cleaned_title is None:
        raise BoardValidationError("Title is required")
    if starts_at is None:
        raise BoardValidationError("Date/time is required")
    cleaned_host = _clean(host_name)
    if event.type == EventType.TEAM and cleaned_host is None:
        raise BoardValidationError("Host name is required for team events")

    event.title = cleaned_title
    event.starts_at = starts_at
    event.host_name = cleaned_host if event.type == EventType.TEAM else event.host_name
    event.description = _clean(description)
    if is_voting_open is not None:
        event.is_voting_open = is_voting_open
    db.flush()
    logger.info("Updated event %s", event_id)
    return event


def admin_update_event(
    db: Session, event_id: int, changes: dict[str, Any], *, is_host: bool
) -> Event:
    """Apply a partial update from the host console.

    Only keys in ADMIN_UPDATABLE_FIELDS are considered; blank titles are ignored.
    """
    require_host(is_host)
    event = get_event_or_404(db, event_id)
    changes = {k: v for k, v in changes.items() if k in ADMIN_UPDATABLE_FIELDS}

    data: dict[str, Any] = {}
    for key in ("is_active", "is_voting_open"):
        if isinstance(changes.get(key), bool):
            data[key] = changes[key]
    title = changes.get("title")
    if isinstance(title, str) and title.strip():
        data["title"] = title.strip()
    if "description" in changes:
        data["description"] = _clean(changes["description"])
    if "starts_at" in changes:
        data["starts_at"] = changes["starts_at"]

    if not data:
        raise BoardValidationError("No valid fields to update")

    for key, value in data.items():
        setattr(event, key, value)
    db.flush()
    logger.info("Host updated event %s: %s", event_id, ", ".join(sorted(data)))
    return event


def delete_event(db: Session, event_id: int, *, is_host: bool = False) -> None:
    """Delete an event together with its questions and votes."""
    event = get_event_or_404(db, event_id)
    _require_team_or_host(event, is_host)
    db.delete(event)
    db.flush()
    logger.info("Deleted event %s", event_id)


def list_active_events(db: Session) -> list[Event]:
    """Return active events in start-time order."""
    stmt = select(Event).where(Event.is_active.is_(True)).order_by(Event.starts_at.asc(), Event.id)
    return list(db.scalars(stmt))


def list_all_events(db: Session, *, is_host: bool) -> list[EventSummary]:
    """Return every event, newest first, with question counts (host only)."""
    require_host(is_host)
    counts = (
        select(Question.event_id, func.count(Question.id).label("n"))
        .group_by(Question.event_id)
        .subquery()
    )
    stmt = (
        select(Event, func.coalesce(counts.c.n, 0))
        .outerjoin(counts, counts.c.event_id == Event.id)
        .order_by(Event.created_at.desc(), Event.id.desc())
    )
    return [EventSummary(event=event, question_count=int(n)) for event, n in db.execute(stmt)]


def list_past_events(db: Session) -> list[EventSummary]:
    """Return closed events with counts over their non-hidden questions."""
    events = list(
        db.scalars(
            select(Event)
            .where(Event.status == EventStatus.CLOSED)
            .order_by(Event.starts_at.desc(), Event.id.desc())
        )
    )
    if not events:
        return []

    event_ids = [event.id for event in events]
    question_counts = dict(
        db.execute(
            select(Question.event_id, func.count(Question.id))
            .where(Question.event_id.in_(event_ids), Question.is_hidden.is_(False))
            .group_by(Question.event_id)
        ).all()
    )
    vote_counts = dict(
        db.execute(
            select(Question.event_id, func.count())
            .select_from(QuestionVote)
            .join(Question, QuestionVote.question_id == Question.id)
            .where(Question.event_id.in_(event_ids), Question.is_hidden.is_(False))
            .group_by(Question.event_id)
        ).all()
    )
    return [
        EventSummary(
            event=event,
            question_count=int(question_counts.get(event.id, 0)),
            vote_count=int(vote_counts.get(event.id, 0)),
        )
        for event in events
    ]
