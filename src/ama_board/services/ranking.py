"""Ranking and audience-specific projection of a question board."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from functools import cmp_to_key
from typing import Protocol, TypeVar

from ama_board.db.time import as_utc, utcnow
from ama_board.models import QuestionStatus
from ama_board.services.questions import within_edit_window


class SortMode(str, enum.Enum):
    """Requested ordering for non-pinned questions."""

    SCORE = "score"
    NEWEST = "newest"


class QuestionLike(Protocol):
    """Attributes the projection reads from a question."""

    id: int
    event_id: int
    text: str
    submitted_name: str | None
    is_anonymous: bool
    submitter_id: str | None
    status: QuestionStatus
    is_hidden: bool
    pinned_at: datetime | None
    created_at: datetime


class Rankable(Protocol):
    """Fields the comparator orders by; satisfied by views and client rows."""

    id: int
    score: int
    pinned_at: datetime | None
    created_at: datetime


RankableT = TypeVar("RankableT", bound=Rankable)

# (voter_id, value) pairs for one question
VoteRows = Sequence[tuple[str, int]]


@dataclass(frozen=True)
class QuestionView:
    """One question as seen by a particular caller."""

    id: int
    event_id: int
    text: str
    submitted_name: str | None
    is_anonymous: bool
    status: QuestionStatus
    is_hidden: bool
    pinned_at: datetime | None
    created_at: datetime
    score: int
    my_vote: int | None
    is_own: bool
    can_edit: bool
    vote_count: int = 0


def visible_to(question: QuestionLike, is_host: bool) -> bool:
    """Return True if the caller's audience may see the question."""
    if is_host:
        return True
    return question.status == QuestionStatus.OPEN and not question.is_hidden


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


def compare_views(a: Rankable, b: Rankable, mode: SortMode) -> int:
    """Three-way comparator: pinned bucket, then the mode key, then id.

    Negative means `a` sorts before `b`.
    """
    a_pinned = a.pinned_at is not None
    b_pinned = b.pinned_at is not None
    if a_pinned != b_pinned:
        return -1 if a_pinned else 1

    if a_pinned and b_pinned:
        # Most recently pinned first.
        delta = (as_utc(b.pinned_at) - as_utc(a.pinned_at)).total_seconds()  # type: ignore[arg-type]
        if delta:
            return _sign(delta)
    else:
        if mode == SortMode.SCORE and a.score != b.score:
            return b.score - a.score
        delta = (as_utc(b.created_at) - as_utc(a.created_at)).total_seconds()
        if delta:
            return _sign(delta)

    # Stable final tiebreak so equal rows never swap between polls.
    return _sign(b.id - a.id)


def sort_views(views: Iterable[RankableT], mode: SortMode) -> list[RankableT]:
    """Return views ordered by the pin-aware comparator for `mode`."""
    return sorted(views, key=cmp_to_key(lambda a, b: compare_views(a, b, mode)))


def build_view(
    question: QuestionLike,
    votes: VoteRows,
    *,
    caller_voter_id: str | None,
    now: datetime,
) -> QuestionView:
    """Annotate one question with score and the caller's relation to it."""
    score = sum(value for _, value in votes)
    my_vote = None
    if caller_voter_id:
        my_vote = next((value for voter, value in votes if voter == caller_voter_id), None)
    is_own = bool(caller_voter_id) and question.submitter_id == caller_voter_id
    return QuestionView(
        id=question.id,
        event_id=question.event_id,
        text=question.text,
        submitted_name=None if question.is_anonymous else question.submitted_name,
        is_anonymous=question.is_anonymous,
        status=question.status,
        is_hidden=question.is_hidden,
        pinned_at=question.pinned_at,
        created_at=question.created_at,
        score=score,
        my_vote=my_vote,
        is_own=is_own,
        can_edit=is_own and within_edit_window(question.created_at, now),
        vote_count=len(votes),
    )


def project(
    questions: Iterable[QuestionLike],
    votes_by_question: Mapping[int, VoteRows],
    *,
    sort_mode: SortMode,
    caller_voter_id: str | None,
    caller_is_host: bool,
    now: datetime | None = None,
) -> list[QuestionView]:
    """Filter, annotate and order questions for one caller.

    Args:
        questions: Candidate questions of one event.
        votes_by_question: Vote rows keyed by question id, fetched in the same read.
        sort_mode: Ordering for non-pinned questions.
        caller_voter_id: Identity resolved for the request, if any.
        caller_is_host: Hosts see every status and hidden question.
        now: Evaluation time for edit windows; defaults to the server clock.

    Returns:
        Ordered views; empty when nothing is visible.
    """
    now = now or utcnow()
    views = [
        build_view(
            question,
            votes_by_question.get(question.id, ()),
            caller_voter_id=caller_voter_id,
            now=now,
        )
        for question in questions
        if visible_to(question, caller_is_host)
    ]
    return sort_views(views, sort_mode)


def split_host_tabs(views: Iterable[QuestionView]) -> tuple[list[QuestionView], list[QuestionView]]:
    """Split a host listing into the open tab and the answered tab.

    Open questions rank by score (newest first on ties); answered ones are
    listed newest first.
    """
    open_tab: list[QuestionView] = []
    answered_tab: list[QuestionView] = []
    for view in views:
        (open_tab if view.status == QuestionStatus.OPEN else answered_tab).append(view)

    open_tab.sort(key=lambda v: (-v.score, -as_utc(v.created_at).timestamp(), -v.id))
    answered_tab.sort(key=lambda v: (-as_utc(v.created_at).timestamp(), -v.id))
    return open_tab, answered_tab
