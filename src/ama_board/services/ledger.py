"""Vote ledger: one signed vote per (question, voter) and derived scores."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from ama_board.db.time import utcnow
from ama_board.models import Question, QuestionStatus, QuestionVote
from ama_board.services.errors import BoardValidationError, NotFoundError, VotingClosedError

logger = logging.getLogger(__name__)

VALID_VOTE_VALUES = frozenset({-1, 0, 1})


@dataclass(frozen=True)
class VoteResult:
    """Authoritative state returned to the voter after a write."""

    question_id: int
    score: int
    my_vote: int | None


def _upsert_statement(session: Session, values: dict[str, Any]) -> Any:
    """Build a dialect-specific INSERT that updates the existing row on conflict."""
    dialect = session.get_bind().dialect.name
    update_cols = ("value", "updated_at")

    if dialect == "postgresql":
        from sqlalchemy.dialects.postgresql import insert as pg_insert

        stmt = pg_insert(QuestionVote).values(**values)
        return stmt.on_conflict_do_update(
            index_elements=[QuestionVote.question_id, QuestionVote.voter_id],
            set_={col: stmt.excluded[col] for col in update_cols},
        )
    if dialect == "sqlite":
        from sqlalchemy.dialects.sqlite import insert as sqlite_insert

        stmt = sqlite_insert(QuestionVote).values(**values)
        return stmt.on_conflict_do_update(
            index_elements=[QuestionVote.question_id, QuestionVote.voter_id],
            set_={col: stmt.excluded[col] for col in update_cols},
        )
    if dialect in ("mysql", "mariadb"):
        from sqlalchemy.dialects.mysql import insert as mysql_insert

        stmt = mysql_insert(QuestionVote).values(**values)
        return stmt.on_duplicate_key_update(
            {col: stmt.inserted[col] for col in update_cols}
        )
    raise NotImplementedError(f"Vote upsert is not supported on dialect {dialect!r}")


def question_score(db: Session, question_id: int) -> int:
    """Return the sum of all vote values for a question."""
    total = db.execute(
        select(func.coalesce(func.sum(QuestionVote.value), 0)).where(
            QuestionVote.question_id == question_id
        )
    ).scalar_one()
    return int(total)


def voter_vote(db: Session, question_id: int, voter_id: str) -> int | None:
    """Return the voter's stored vote on a question, or None."""
    value = db.execute(
        select(QuestionVote.value).where(
            QuestionVote.question_id == question_id,
            QuestionVote.voter_id == voter_id,
        )
    ).scalar_one_or_none()
    return int(value) if value is not None else None


def ensure_votable(question: Question) -> None:
    """Raise VotingClosedError unless the question currently accepts votes."""
    event = question.event
    if event.is_closed:
        raise VotingClosedError("This event is closed")
    if not event.is_voting_open:
        raise VotingClosedError("Voting is closed for this event")
    if question.status != QuestionStatus.OPEN:
        raise VotingClosedError("Cannot vote on an answered question")


def cast_vote(db: Session, question_id: int, voter_id: str, value: int) -> VoteResult:
    """Set, change or clear a voter's vote on a question.

    Args:
        db: Database session; the caller commits.
        question_id: Target question.
        voter_id: Identity resolved once for the current request.
        value: Fully resolved target value: 1, -1, or 0 to clear.

    Returns:
        The recomputed score and the voter's resulting vote.

    Raises:
        BoardValidationError: If `value` is not -1, 0 or 1.
        NotFoundError: If the question does not exist.
        VotingClosedError: If the question or its event rejects votes.
    """
    if value not in VALID_VOTE_VALUES:
        raise BoardValidationError("value must be 1, -1, or 0")

    question = db.get(Question, question_id)
    if question is None:
        raise NotFoundError("Question not found")
    ensure_votable(question)

    if value == 0:
        db.execute(
            delete(QuestionVote).where(
                QuestionVote.question_id == question_id,
                QuestionVote.voter_id == voter_id,
            )
        )
    else:
        now = utcnow()
        db.execute(
            _upsert_statement(
                db,
                {
                    "question_id": question_id,
                    "voter_id": voter_id,
                    "value": value,
                    "created_at": now,
                    "updated_at": now,
                },
            )
        )

    score = question_score(db, question_id)
    logger.info("Vote %+d on question %s (score now %d)", value, question_id, score)
    return VoteResult(
        question_id=question_id,
        score=score,
        my_vote=None if value == 0 else value,
    )
