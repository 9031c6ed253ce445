"""Optimistic client state reconciled against polled server snapshots.

A write is applied locally before the network call resolves and its row is
marked in flight. Poll refreshes that arrive meanwhile must not overwrite an
in-flight row, otherwise a poll that raced ahead of the write visibly undoes
the user's click. The write's own response, not the next poll, settles the row.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Collection, Hashable, Iterable, Mapping
from dataclasses import dataclass
from typing import TypeVar

from ama_board.schemas.question import QuestionViewResponse

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
T = TypeVar("T")


def merge_refresh(
    current: Mapping[K, T],
    incoming: Iterable[T],
    pending: Collection[K],
    key: Callable[[T], K],
) -> list[T]:
    """Merge a refreshed batch with local state.

    For each item in `incoming`, the local copy wins if its key is pending,
    otherwise the server copy is taken. Order follows `incoming`; items the
    server no longer returns are dropped.
    """
    merged: list[T] = []
    for item in incoming:
        item_key = key(item)
        if item_key in pending and item_key in current:
            merged.append(current[item_key])
        else:
            merged.append(item)
    return merged


def resolve_vote_target(current_vote: int | None, clicked: int) -> int:
    """Clicking the direction already held clears it; anything else sets it."""
    if clicked not in (1, -1):
        raise ValueError("clicked direction must be 1 or -1")
    return 0 if current_vote == clicked else clicked


@dataclass(frozen=True)
class PendingVote:
    """An optimistic vote waiting for the server."""

    question_id: int
    target: int
    previous_vote: int | None
    delta: int


class OptimisticBoard:
    """Local copy of one event's question list with in-flight vote tracking."""

    def __init__(self, rows: Iterable[QuestionViewResponse] = ()) -> None:
        self._rows: dict[int, QuestionViewResponse] = {}
        self._order: list[int] = []
        self._pending: dict[int, PendingVote] = {}
        self._replace(list(rows))

    def _replace(self, rows: list[QuestionViewResponse]) -> None:
        self._rows = {row.id: row for row in rows}
        self._order = [row.id for row in rows]

    @property
    def rows(self) -> list[QuestionViewResponse]:
        """Rows in the order of the latest server listing."""
        return [self._rows[qid] for qid in self._order]

    def get(self, question_id: int) -> QuestionViewResponse | None:
        """Return the local row for a question, if present."""
        return self._rows.get(question_id)

    def is_in_flight(self, question_id: int) -> bool:
        """Return True while a vote on the question awaits the server."""
        return question_id in self._pending

    def apply_poll(self, batch: Iterable[QuestionViewResponse]) -> None:
        """Merge a poll response, keeping local copies of in-flight rows."""
        self._replace(merge_refresh(self._rows, batch, self._pending, key=lambda row: row.id))

    def begin_vote(self, question_id: int, clicked: int) -> PendingVote | None:
        """Apply a click optimistically.

        The target is resolved from the current local row, which already
        reflects any confirmed or optimistic change. Returns None, changing
        nothing, when the question is unknown or already in flight.
        """
        row = self._rows.get(question_id)
        if row is None or question_id in self._pending:
            return None

        target = resolve_vote_target(row.my_vote, clicked)
        delta = target - (row.my_vote or 0)
        pending = PendingVote(
            question_id=question_id,
            target=target,
            previous_vote=row.my_vote,
            delta=delta,
        )
        self._rows[question_id] = row.model_copy(
            update={"score": row.score + delta, "my_vote": target or None}
        )
        self._pending[question_id] = pending
        return pending

    def confirm_vote(self, question_id: int, score: int, my_vote: int | None) -> None:
        """Settle an in-flight vote with the server's authoritative answer."""
        self._pending.pop(question_id, None)
        row = self._rows.get(question_id)
        if row is not None:
            self._rows[question_id] = row.model_copy(update={"score": score, "my_vote": my_vote})

    def revert_vote(self, question_id: int) -> None:
        """Undo an in-flight vote's optimistic delta exactly."""
        pending = self._pending.pop(question_id, None)
        if pending is None:
            return
        row = self._rows.get(question_id)
        if row is not None:
            self._rows[question_id] = row.model_copy(
                update={"score": row.score - pending.delta, "my_vote": pending.previous_vote}
            )
        logger.debug("Reverted optimistic vote on question %s", question_id)
