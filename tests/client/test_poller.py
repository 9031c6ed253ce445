# tests/client/test_poller.py
"""Tests for the polling board and its optimistic vote cycle."""

import asyncio

import pytest
import pytest_asyncio

from ama_board.client.http import ApiError, BoardClient, NetworkError
from ama_board.client.poller import BoardPoller
from ama_board.models import QuestionStatus
from ama_board.schemas.vote import VoteResponse
from ama_board.services.ranking import SortMode
from tests.conftest import make_row, make_snapshot


@pytest.fixture
def mock_board_client(mocker):
    client = mocker.AsyncMock(spec=BoardClient)
    client.fetch_board.return_value = make_snapshot(make_row(1, score=0), make_row(2, score=3))
    return client


@pytest_asyncio.fixture
async def poller(mock_board_client):
    poller = BoardPoller(mock_board_client, event_id=1, interval=0.01)
    await poller.refresh()
    return poller


@pytest.mark.asyncio
async def test_refresh_populates_board(poller, mock_board_client) -> None:
    mock_board_client.fetch_board.assert_awaited_once_with(1, SortMode.SCORE)
    assert [row.id for row in poller.board.rows] == [1, 2]
    assert poller.event.title == "All hands"
    assert poller.metrics.question_count == 2


@pytest.mark.asyncio
async def test_vote_confirms_with_server_score(poller, mock_board_client) -> None:
    mock_board_client.cast_vote.return_value = VoteResponse(question_id=1, score=5, my_vote=1)

    result = await poller.vote(1, 1)

    mock_board_client.cast_vote.assert_awaited_once_with(1, 1)
    assert result.score == 5
    assert poller.board.get(1).score == 5
    assert not poller.board.is_in_flight(1)


@pytest.mark.asyncio
async def test_stale_poll_during_vote_does_not_undo_click(poller, mock_board_client) -> None:
    release = asyncio.Event()

    async def slow_cast_vote(question_id, value):
        await release.wait()
        return VoteResponse(question_id=question_id, score=1, my_vote=1)

    mock_board_client.cast_vote.side_effect = slow_cast_vote
    task = asyncio.create_task(poller.vote(1, 1))
    await asyncio.sleep(0)
    assert poller.board.get(1).score == 1

    # A poll that was answered before the vote landed still reports score 0.
    mock_board_client.fetch_board.return_value = make_snapshot(make_row(2, score=3), make_row(1, score=0))
    await poller.refresh()
    assert poller.board.get(1).score == 1
    assert poller.board.get(1).my_vote == 1
    assert [row.id for row in poller.board.rows] == [2, 1]

    # Clicking again while in flight is ignored.
    assert await poller.vote(1, 1) is None

    release.set()
    await task
    assert poller.board.get(1).score == 1
    assert not poller.board.is_in_flight(1)
    mock_board_client.cast_vote.assert_awaited_once_with(1, 1)


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [NetworkError("boom"), ApiError(409, "Voting is closed")])
async def test_failed_vote_reverts(poller, mock_board_client, error) -> None:
    mock_board_client.cast_vote.side_effect = error

    result = await poller.vote(2, -1)

    assert result is None
    assert poller.board.get(2).score == 3
    assert poller.board.get(2).my_vote is None
    assert not poller.board.is_in_flight(2)


@pytest.mark.asyncio
async def test_set_sort_mode_refetches(poller, mock_board_client) -> None:
    await poller.set_sort_mode(SortMode.NEWEST)

    mock_board_client.fetch_board.assert_awaited_with(1, SortMode.NEWEST)


@pytest.mark.asyncio
async def test_submit_refreshes_board(poller, mock_board_client) -> None:
    mock_board_client.submit_question.return_value = make_row(3, is_own=True, can_edit=True)
    mock_board_client.fetch_board.return_value = make_snapshot(make_row(1), make_row(2), make_row(3))

    created = await poller.submit("New one", is_anonymous=True)

    assert created.id == 3
    assert [row.id for row in poller.board.rows] == [1, 2, 3]


@pytest.mark.asyncio
async def test_submit_errors_propagate(poller, mock_board_client) -> None:
    mock_board_client.submit_question.side_effect = ApiError(400, "Question text is required")

    with pytest.raises(ApiError):
        await poller.submit("   ")


@pytest.mark.asyncio
async def test_host_tabs(poller, mock_board_client) -> None:
    mock_board_client.fetch_board.return_value = make_snapshot(
        make_row(1, score=1),
        make_row(2, score=4),
        make_row(3, status=QuestionStatus.ANSWERED),
    )
    await poller.refresh()

    open_tab, answered_tab = poller.host_tabs()

    assert [row.id for row in open_tab] == [2, 1]
    assert [row.id for row in answered_tab] == [3]


@pytest.mark.asyncio
async def test_loop_survives_failed_polls(mock_board_client) -> None:
    mock_board_client.fetch_board.side_effect = [NetworkError("offline")] + [make_snapshot(make_row(1))] * 20
    poller = BoardPoller(mock_board_client, event_id=1, interval=0.01)

    await poller.start()
    await asyncio.sleep(0.25)
    await poller.stop()

    assert not poller.running
    assert mock_board_client.fetch_board.await_count >= 2
    assert [row.id for row in poller.board.rows] == [1]


@pytest.mark.asyncio
async def test_unexpected_vote_error_reverts_and_propagates(poller, mock_board_client) -> None:
    mock_board_client.cast_vote.side_effect = ValueError("Expecting value")

    with pytest.raises(ValueError):
        await poller.vote(1, 1)

    assert poller.board.get(1).score == 0
    assert poller.board.get(1).my_vote is None
    assert not poller.board.is_in_flight(1)

    mock_board_client.cast_vote.side_effect = None
    mock_board_client.cast_vote.return_value = VoteResponse(question_id=1, score=1, my_vote=1)
    assert (await poller.vote(1, 1)).score == 1


@pytest.mark.asyncio
async def test_loop_survives_bad_payload(mock_board_client) -> None:
    mock_board_client.fetch_board.side_effect = [ValueError("Expecting value")] + [make_snapshot(make_row(1))] * 20
    poller = BoardPoller(mock_board_client, event_id=1, interval=0.01)

    await poller.start()
    await asyncio.sleep(0.25)
    assert poller.running
    await poller.stop()

    assert mock_board_client.fetch_board.await_count >= 2
    assert [row.id for row in poller.board.rows] == [1]
