"""Fixed-interval polling loop driving a participant or host board."""

from __future__ import annotations

import asyncio
import logging

from ama_board.core.settings import settings
from ama_board.schemas.event import BoardEventResponse
from ama_board.schemas.question import BoardMetricsResponse, QuestionViewResponse
from ama_board.schemas.vote import VoteResponse
from ama_board.services.ranking import SortMode, split_host_tabs

from .http import BoardClient, ClientError
from .reconcile import OptimisticBoard

logger = logging.getLogger(__name__)


class PollingLoop:
    """Calls `refresh()` every `interval` seconds until stopped.

    Failed refreshes are logged and retried on the next tick. Unexpected
    payload errors are logged with a traceback and do not end the loop.
    """

    def __init__(self, interval: float) -> None:
        self.interval = interval
        self._task: asyncio.Task[None] | None = None
        self._stopping = asyncio.Event()

    async def refresh(self) -> None:  # pragma: no cover - overridden
        raise NotImplementedError

    @property
    def running(self) -> bool:
        """Return True while the background loop is active."""
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Start the background polling loop."""
        if not self.running:
            self._stopping.clear()
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Stop the background polling loop."""
        if self._task is None:
            return
        self._stopping.set()
        await self._task
        self._task = None

    async def _run(self) -> None:
        while not self._stopping.is_set():
            try:
                await self.refresh()
            except ClientError as exc:
                logger.warning("%s poll failed: %s", type(self).__name__, exc)
            except (OSError, ConnectionError, TimeoutError) as exc:
                logger.warning("%s poll hit a connection error: %s", type(self).__name__, exc)
            except (ValueError, TypeError, KeyError, AttributeError):
                logger.error("%s poll failed unexpectedly", type(self).__name__, exc_info=True)
            try:
                await asyncio.wait_for(self._stopping.wait(), timeout=max(0.1, self.interval))
            except TimeoutError:
                continue


class BoardPoller(PollingLoop):
    """Participant/host view of one event: polling plus optimistic voting."""

    def __init__(
        self,
        client: BoardClient,
        event_id: int,
        *,
        sort_mode: SortMode = SortMode.SCORE,
        interval: float | None = None,
    ) -> None:
        super().__init__(interval or settings.participant_poll_interval_seconds)
        self.client = client
        self.event_id = event_id
        self.sort_mode = sort_mode
        self.board = OptimisticBoard()
        self.event: BoardEventResponse | None = None
        self.metrics: BoardMetricsResponse | None = None

    async def refresh(self) -> None:
        """Fetch the board and merge it with local optimistic state."""
        snapshot = await self.client.fetch_board(self.event_id, self.sort_mode)
        self.event = snapshot.event
        self.metrics = snapshot.metrics
        self.board.apply_poll(snapshot.questions)

    async def set_sort_mode(self, sort_mode: SortMode) -> None:
        """Switch ordering and refetch immediately."""
        self.sort_mode = sort_mode
        await self.refresh()

    async def vote(self, question_id: int, clicked: int) -> VoteResponse | None:
        """Run one optimistic vote cycle for a click on `clicked` (1 or -1).

        Clicks on a question that is already in flight are ignored. API failures
        revert and return None; any other error reverts and propagates. The
        next poll resynchronizes either way.
        """
        pending = self.board.begin_vote(question_id, clicked)
        if pending is None:
            return None
        try:
            result = await self.client.cast_vote(question_id, pending.target)
        except ClientError as exc:
            logger.warning("Vote on question %s failed, reverting: %s", question_id, exc)
            self.board.revert_vote(question_id)
            return None
        except BaseException:
            self.board.revert_vote(question_id)
            raise
        self.board.confirm_vote(question_id, result.score, result.my_vote)
        return result

    async def submit(
        self,
        text: str,
        *,
        submitted_name: str | None = None,
        is_anonymous: bool = False,
    ) -> QuestionViewResponse:
        """Submit a question and refresh; errors propagate to the caller."""
        question = await self.client.submit_question(
            self.event_id, text, submitted_name=submitted_name, is_anonymous=is_anonymous
        )
        await self.refresh()
        return question

    async def edit(self, question_id: int, text: str) -> None:
        """Edit one of this voter's questions and refresh."""
        await self.client.edit_question(question_id, text)
        await self.refresh()

    async def retract(self, question_id: int) -> None:
        """Retract one of this voter's questions and refresh."""
        await self.client.retract_question(question_id)
        await self.refresh()

    def host_tabs(self) -> tuple[list[QuestionViewResponse], list[QuestionViewResponse]]:
        """Split the current rows into open and answered tabs for a host."""
        return split_host_tabs(self.board.rows)  # type: ignore[arg-type,return-value]
