"""Question submission and lifecycle transitions.

Host transitions (status, hidden, pinned) are unconditional for hosts and
never touch the other two flags. Submitter transitions (edit, retract) are
limited to the owning voter within the edit window.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from ama_board.core.settings import settings
from ama_board.db.time import as_utc, utcnow
from ama_board.models import Event, Question, QuestionStatus
from ama_board.services.errors import (
    BoardValidationError,
    ForbiddenError,
    NotFoundError,
    VotingClosedError,
    WindowExpiredError,
    require_host,
)

logger = logging.getLogger(__name__)


def edit_window() -> timedelta:
    """Return the configured submitter edit window."""
    return timedelta(seconds=settings.edit_window_seconds)


def within_edit_window(created_at: datetime, now: datetime | None = None) -> bool:
    """Return True while `now` is no later than `created_at` plus the edit window."""
    now = now or utcnow()
    return as_utc(now) - as_utc(created_at) <= edit_window()


def clean_question_text(raw: str | None) -> str:
    """Trim and validate question text."""
    text = (raw or "").strip()
    if not text:
        raise BoardValidationError("Question text is required")
    if len(text) > settings.question_max_length:
        raise BoardValidationError(
            f"Questions must be {settings.question_max_length} characters or fewer."
        )
    return text


def get_question_or_404(db: Session, question_id: int) -> Question:
    """Return the question or raise NotFoundError."""
    question = db.get(Question, question_id)
    if question is None:
        raise NotFoundError("Question not found")
    return question


def submit_question(
    db: Session,
    *,
    event_id: int,
    text: str | None,
    submitted_name: str | None,
    is_anonymous: bool,
    submitter_id: str | None,
    now: datetime | None = None,
) -> Question:
    """Create a question on an active, open event.

    Raises:
        NotFoundError: If the event is missing or inactive.
        VotingClosedError: If the event has been closed.
        BoardValidationError: On empty/over-long text or a missing name.
    """
    event = db.get(Event, event_id)
    if event is None or not event.is_active:
        raise NotFoundError("Event not found or inactive")
    if event.is_closed:
        raise VotingClosedError("This event is closed")

    cleaned = clean_question_text(text)
    name = None if is_anonymous else (submitted_name or "").strip() or None
    if not is_anonymous and name is None:
        raise BoardValidationError("Name is required when not submitting anonymously")

    question = Question(
        event_id=event_id,
        text=cleaned,
        submitted_name=name,
        is_anonymous=is_anonymous,
        submitter_id=submitter_id,
        status=QuestionStatus.OPEN,
        is_hidden=False,
        pinned_at=None,
        created_at=now or utcnow(),
    )
    db.add(question)
    db.flush()
    logger.info("Question %s submitted to event %s", question.id, event_id)
    return question


def _require_owner_in_window(question: Question, voter_id: str | None, now: datetime) -> None:
    # Ownership is checked first so a stranger never learns the window state.
    if not voter_id or question.submitter_id != voter_id:
        raise ForbiddenError()
    if not within_edit_window(question.created_at, now):
        raise WindowExpiredError()


def edit_question(
    db: Session,
    question_id: int,
    *,
    voter_id: str | None,
    text: str | None,
    now: datetime | None = None,
) -> Question:
    """Replace the text of the caller's own question inside the edit window."""
    question = get_question_or_404(db, question_id)
    _require_owner_in_window(question, voter_id, now or utcnow())
    question.text = clean_question_text(text)
    db.flush()
    logger.info("Question %s edited by submitter", question_id)
    return question


def retract_question(
    db: Session,
    question_id: int,
    *,
    voter_id: str | None,
    now: datetime | None = None,
) -> None:
    """Delete the caller's own question inside the edit window."""
    question = get_question_or_404(db, question_id)
    try:
        _require_owner_in_window(question, voter_id, now or utcnow())
    except WindowExpiredError as exc:
        raise WindowExpiredError("Retract window has expired") from exc
    db.delete(question)
    db.flush()
    logger.info("Question %s retracted by submitter", question_id)


def set_status(
    db: Session, question_id: int, status: QuestionStatus, *, is_host: bool
) -> Question:
    """Mark a question OPEN or ANSWERED (host only)."""
    require_host(is_host)
    question = get_question_or_404(db, question_id)
    question.status = status
    db.flush()
    logger.info("Question %s status -> %s", question_id, status.value)
    return question


def set_hidden(db: Session, question_id: int, hidden: bool, *, is_host: bool) -> Question:
    """Hide or unhide a question from the public board (host only)."""
    require_host(is_host)
    question = get_question_or_404(db, question_id)
    question.is_hidden = hidden
    db.flush()
    logger.info("Question %s hidden=%s", question_id, hidden)
    return question


def set_pinned(
    db: Session,
    question_id: int,
    pinned: bool,
    *,
    is_host: bool,
    now: datetime | None = None,
) -> Question:
    """Pin a question at the current server time, or unpin it (host only)."""
    require_host(is_host)
    question = get_question_or_404(db, question_id)
    question.pinned_at = (now or utcnow()) if pinned else None
    db.flush()
    logger.info("Question %s pinned=%s", question_id, pinned)
    return question
