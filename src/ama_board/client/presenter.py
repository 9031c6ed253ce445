"""Presenter view: a host-driven queue of open questions shown one at a time."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable

from ama_board.core.settings import settings
from ama_board.models import QuestionStatus
from ama_board.schemas.question import QuestionViewResponse
from ama_board.services.ranking import SortMode, sort_views

from .http import BoardClient, ClientError
from .poller import PollingLoop
from .reconcile import merge_refresh

logger = logging.getLogger(__name__)

PRESENTER_SORT_MODES: dict[str, SortMode] = {
    "top": SortMode.SCORE,
    "newest": SortMode.NEWEST,
}


class PresenterController(PollingLoop):
    """Queue of open, visible questions with optimistic mark-answered.

    Marking a question answered removes it from the queue immediately and
    opens an undo entry. While the entry is live, poll results that still
    report the question as OPEN do not bring it back.
    """

    def __init__(
        self,
        client: BoardClient,
        event_id: int,
        *,
        sort_mode: str | SortMode = "top",
        interval: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__(settings.presenter_poll_intervals[0])
        self.client = client
        self.event_id = event_id
        self.sort_mode = self._parse_sort_mode(sort_mode)
        self.index = 0
        self._clock = clock
        self._rows: dict[int, QuestionViewResponse] = {}
        self._undo: dict[int, float] = {}
        if interval is not None:
            self.set_interval(interval)

    @staticmethod
    def _parse_sort_mode(sort_mode: str | SortMode) -> SortMode:
        if isinstance(sort_mode, SortMode):
            return sort_mode
        try:
            return PRESENTER_SORT_MODES[sort_mode]
        except KeyError:
            raise ValueError(f"Unknown presenter sort mode: {sort_mode!r}") from None

    def set_interval(self, seconds: float) -> None:
        """Change the poll interval; only the configured choices are accepted."""
        if seconds not in settings.presenter_poll_intervals:
            raise ValueError(
                f"Poll interval must be one of {settings.presenter_poll_intervals}, got {seconds}"
            )
        self.interval = float(seconds)

    def set_sort_mode(self, sort_mode: str | SortMode) -> None:
        """Switch between "top" and "newest" and keep the selection in range."""
        self.sort_mode = self._parse_sort_mode(sort_mode)
        self._clamp()

    @property
    def queue(self) -> list[QuestionViewResponse]:
        """Open, non-hidden questions, pinned first then by the sort mode."""
        candidates = [
            row
            for row in self._rows.values()
            if row.status == QuestionStatus.OPEN and not row.is_hidden
        ]
        return sort_views(candidates, self.sort_mode)

    @property
    def current(self) -> QuestionViewResponse | None:
        """The question on screen, or None when the queue is empty."""
        queue = self.queue
        return queue[self.index] if queue else None

    @property
    def pending_undo(self) -> list[int]:
        """Question ids that can still be reopened, oldest first."""
        self.prune()
        return list(self._undo)

    def _clamp(self) -> None:
        self.index = max(0, min(self.index, len(self.queue) - 1))

    def next(self) -> QuestionViewResponse | None:
        """Move to the next question, stopping at the end of the queue."""
        self.index += 1
        self._clamp()
        return self.current

    def previous(self) -> QuestionViewResponse | None:
        """Move to the previous question, stopping at the start."""
        self.index -= 1
        self._clamp()
        return self.current

    def prune(self) -> None:
        """Drop undo entries whose deadline has passed."""
        now = self._clock()
        for question_id in [qid for qid, deadline in self._undo.items() if deadline <= now]:
            del self._undo[question_id]

    def apply_poll(self, batch: Iterable[QuestionViewResponse]) -> None:
        """Merge host rows, keeping local copies while an undo entry is live."""
        self.prune()
        merged = merge_refresh(self._rows, batch, self._undo, key=lambda row: row.id)
        self._rows = {row.id: row for row in merged}
        self._clamp()

    async def refresh(self) -> None:
        snapshot = await self.client.fetch_board(self.event_id, self.sort_mode)
        self.apply_poll(snapshot.questions)

    def _set_status(self, question_id: int, status: QuestionStatus) -> None:
        row = self._rows.get(question_id)
        if row is not None:
            self._rows[question_id] = row.model_copy(update={"status": status})

    async def mark_answered(self, question_id: int | None = None) -> bool:
        """Mark a question (default: the current one) answered.

        Returns False when there is nothing to mark or the server refused, in
        which case the question is back in the queue. Unexpected errors also
        put it back, then propagate.
        """
        if question_id is None:
            current = self.current
            if current is None:
                return False
            question_id = current.id

        row = self._rows.get(question_id)
        if row is None or row.status != QuestionStatus.OPEN:
            return False

        self._set_status(question_id, QuestionStatus.ANSWERED)
        self._undo[question_id] = self._clock() + settings.presenter_undo_seconds
        self._clamp()
        try:
            await self.client.set_answered(question_id, True)
        except ClientError as exc:
            logger.warning("Marking question %s answered failed, reverting: %s", question_id, exc)
            self._undo.pop(question_id, None)
            self._set_status(question_id, QuestionStatus.OPEN)
            self._clamp()
            return False
        except BaseException:
            self._undo.pop(question_id, None)
            self._set_status(question_id, QuestionStatus.OPEN)
            self._clamp()
            raise
        return True

    async def undo(self, question_id: int | None = None) -> bool:
        """Reopen a recently answered question (default: the latest one)."""
        self.prune()
        if question_id is None:
            if not self._undo:
                return False
            question_id = next(reversed(self._undo))
        if question_id not in self._undo:
            return False

        del self._undo[question_id]
        self._set_status(question_id, QuestionStatus.OPEN)
        try:
            await self.client.set_answered(question_id, False)
        except ClientError as exc:
            logger.warning("Reopening question %s failed, reverting: %s", question_id, exc)
            self._set_status(question_id, QuestionStatus.ANSWERED)
            self._clamp()
            return False
        except BaseException:
            self._set_status(question_id, QuestionStatus.ANSWERED)
            self._clamp()
            raise
        return True
