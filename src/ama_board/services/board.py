"""Read side of the board: one query returning event, ranked questions and metrics."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from ama_board.models import Event, Question, QuestionStatus, QuestionVote
from ama_board.services.errors import NotFoundError
from ama_board.services.ranking import QuestionView, SortMode, project


@dataclass(frozen=True)
class BoardMetrics:
    """Aggregate counts over the caller's view."""

    question_count: int
    vote_count: int


@dataclass(frozen=True)
class BoardSnapshot:
    """Everything a polling client needs to render one event."""

    event: Event
    questions: list[QuestionView]
    metrics: BoardMetrics


def load_votes(db: Session, question_ids: list[int]) -> dict[int, list[tuple[str, int]]]:
    """Return (voter_id, value) rows grouped by question id."""
    grouped: dict[int, list[tuple[str, int]]] = defaultdict(list)
    if not question_ids:
        return grouped
    rows = db.execute(
        select(QuestionVote.question_id, QuestionVote.voter_id, QuestionVote.value).where(
            QuestionVote.question_id.in_(question_ids)
        )
    )
    for question_id, voter_id, value in rows:
        grouped[question_id].append((voter_id, int(value)))
    return grouped


def list_questions(
    db: Session,
    event_id: int,
    *,
    sort_mode: SortMode = SortMode.SCORE,
    voter_id: str | None,
    is_host: bool,
    now: datetime | None = None,
) -> BoardSnapshot:
    """Return the event summary and its questions ranked for the caller.

    Non-hosts only ever receive OPEN, unhidden questions. Scores are summed
    from the vote rows read here, never from a cached counter.
    """
    event = db.get(Event, event_id)
    if event is None:
        raise NotFoundError("Event not found")

    stmt = select(Question).where(Question.event_id == event_id)
    if not is_host:
        stmt = stmt.where(Question.status == QuestionStatus.OPEN, Question.is_hidden.is_(False))
    questions = list(db.scalars(stmt))

    votes = load_votes(db, [q.id for q in questions])
    views = project(
        questions,
        votes,
        sort_mode=sort_mode,
        caller_voter_id=voter_id,
        caller_is_host=is_host,
        now=now,
    )
    metrics = BoardMetrics(
        question_count=len(views),
        vote_count=sum(view.vote_count for view in views),
    )
    return BoardSnapshot(event=event, questions=views, metrics=metrics)
