# tests/services/test_questions.py
"""Tests for question submission and lifecycle transitions."""

from datetime import timedelta

import pytest

from ama_board.db.time import as_utc
from ama_board.models import EventStatus, Question, QuestionStatus
from ama_board.services import questions as question_service
from ama_board.services.errors import (
    BoardValidationError,
    ForbiddenError,
    NotFoundError,
    VotingClosedError,
    WindowExpiredError,
)
from tests.conftest import VOTER_A, VOTER_B, add_vote

EPSILON = timedelta(milliseconds=1)
WINDOW = timedelta(seconds=120)


def _submit(db, event, **overrides):
    fields = {
        "event_id": event.id,
        "text": "  Will we keep hybrid work?  ",
        "submitted_name": "Ana",
        "is_anonymous": False,
        "submitter_id": VOTER_A,
    }
    fields.update(overrides)
    return question_service.submit_question(db, **fields)


def test_submit_trims_text_and_starts_open(db_session, event) -> None:
    question = _submit(db_session, event)

    assert question.text == "Will we keep hybrid work?"
    assert question.status == QuestionStatus.OPEN
    assert question.is_hidden is False
    assert question.pinned_at is None
    assert question.submitter_id == VOTER_A


def test_anonymous_submit_drops_name_but_keeps_submitter(db_session, event) -> None:
    question = _submit(db_session, event, is_anonymous=True, submitted_name="Ana")

    assert question.submitted_name is None
    assert question.submitter_id == VOTER_A


def test_submit_requires_name_unless_anonymous(db_session, event) -> None:
    with pytest.raises(BoardValidationError):
        _submit(db_session, event, submitted_name="   ")


@pytest.mark.parametrize("text", ["", "   ", "x" * 281])
def test_submit_rejects_bad_text(db_session, event, text) -> None:
    with pytest.raises(BoardValidationError):
        _submit(db_session, event, text=text)


def test_submit_accepts_text_at_max_length(db_session, event) -> None:
    assert len(_submit(db_session, event, text="y" * 280).text) == 280


def test_submit_to_inactive_event_is_not_found(db_session, event) -> None:
    event.is_active = False
    db_session.flush()

    with pytest.raises(NotFoundError):
        _submit(db_session, event)


def test_submit_to_closed_event_is_rejected(db_session, event) -> None:
    event.status = EventStatus.CLOSED
    db_session.flush()

    with pytest.raises(VotingClosedError):
        _submit(db_session, event)


def test_edit_inside_window_succeeds(db_session, question) -> None:
    now = as_utc(question.created_at) + WINDOW - EPSILON

    edited = question_service.edit_question(
        db_session, question.id, voter_id=VOTER_A, text=" Reworded ", now=now
    )

    assert edited.text == "Reworded"


def test_edit_exactly_at_window_boundary_succeeds(db_session, question) -> None:
    now = as_utc(question.created_at) + WINDOW

    question_service.edit_question(db_session, question.id, voter_id=VOTER_A, text="ok", now=now)


def test_edit_after_window_expires(db_session, question) -> None:
    now = as_utc(question.created_at) + WINDOW + EPSILON

    with pytest.raises(WindowExpiredError):
        question_service.edit_question(
            db_session, question.id, voter_id=VOTER_A, text="late", now=now
        )


@pytest.mark.parametrize("offset", [timedelta(0), WINDOW + timedelta(hours=1)])
def test_edit_by_non_owner_is_forbidden_regardless_of_time(db_session, question, offset) -> None:
    now = as_utc(question.created_at) + offset

    with pytest.raises(ForbiddenError):
        question_service.edit_question(
            db_session, question.id, voter_id=VOTER_B, text="hijack", now=now
        )


def test_edit_without_voter_is_forbidden(db_session, question) -> None:
    with pytest.raises(ForbiddenError):
        question_service.edit_question(db_session, question.id, voter_id=None, text="anon")


def test_retract_deletes_question_and_votes(db_session, question) -> None:
    add_vote(db_session, question, VOTER_B, 1)
    question_id = question.id

    question_service.retract_question(
        db_session, question_id, voter_id=VOTER_A, now=as_utc(question.created_at)
    )
    db_session.expunge_all()

    assert db_session.get(Question, question_id) is None


def test_retract_after_window_expires(db_session, question) -> None:
    now = as_utc(question.created_at) + WINDOW + EPSILON

    with pytest.raises(WindowExpiredError, match="Retract window"):
        question_service.retract_question(db_session, question.id, voter_id=VOTER_A, now=now)


def test_retract_by_non_owner_is_forbidden(db_session, question) -> None:
    with pytest.raises(ForbiddenError):
        question_service.retract_question(db_session, question.id, voter_id=VOTER_B)


def test_missing_question_is_not_found(db_session) -> None:
    with pytest.raises(NotFoundError):
        question_service.edit_question(db_session, 4242, voter_id=VOTER_A, text="x")


def test_host_transitions_are_orthogonal(db_session, question) -> None:
    question_service.set_hidden(db_session, question.id, True, is_host=True)
    question_service.set_pinned(db_session, question.id, True, is_host=True)
    question_service.set_status(db_session, question.id, QuestionStatus.ANSWERED, is_host=True)

    assert question.status == QuestionStatus.ANSWERED
    assert question.is_hidden is True
    assert question.pinned_at is not None

    question_service.set_status(db_session, question.id, QuestionStatus.OPEN, is_host=True)
    assert question.is_hidden is True
    assert question.pinned_at is not None

    question_service.set_pinned(db_session, question.id, False, is_host=True)
    question_service.set_hidden(db_session, question.id, False, is_host=True)
    assert question.pinned_at is None
    assert question.is_hidden is False
    assert question.status == QuestionStatus.OPEN


def test_host_transitions_are_idempotent(db_session, question) -> None:
    for _ in range(2):
        question_service.set_status(
            db_session, question.id, QuestionStatus.ANSWERED, is_host=True
        )
    assert question.status == QuestionStatus.ANSWERED


@pytest.mark.parametrize(
    "transition",
    [
        lambda db, qid: question_service.set_status(db, qid, QuestionStatus.ANSWERED, is_host=False),
        lambda db, qid: question_service.set_hidden(db, qid, True, is_host=False),
        lambda db, qid: question_service.set_pinned(db, qid, True, is_host=False),
    ],
)
def test_host_transitions_require_host(db_session, question, transition) -> None:
    with pytest.raises(ForbiddenError):
        transition(db_session, question.id)
    assert question.status == QuestionStatus.OPEN
    assert question.is_hidden is False
    assert question.pinned_at is None
