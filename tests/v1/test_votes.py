# tests/v1/test_votes.py
"""Tests for vote endpoints."""

import pytest
from fastapi import status

from ama_board.core.settings import settings
from tests.conftest import VOTER_A, VOTER_B


def _vote(client, question_id, value):
    return client.post(f"/api/v1/questions/{question_id}/vote", json={"value": value})


def _my_vote(client, event_id):
    board = client.get(f"/api/v1/events/{event_id}/questions").json()
    return board["questions"][0]["my_vote"]


def test_cast_upvote(voter_client, question) -> None:
    response = _vote(voter_client(VOTER_B), question.id, 1)

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"question_id": question.id, "score": 1, "my_vote": 1}


def test_first_vote_issues_voter_cookie(client, question) -> None:
    response = _vote(client, question.id, 1)

    assert response.status_code == status.HTTP_200_OK
    assert settings.voter_cookie_name in response.cookies

    # The same browser keeps its identity, so a second click is idempotent.
    again = _vote(client, question.id, 1)
    assert again.json()["score"] == 1
    assert settings.voter_cookie_name not in again.cookies


def test_existing_cookie_is_not_reissued(voter_client, question) -> None:
    response = _vote(voter_client(VOTER_B), question.id, -1)

    assert settings.voter_cookie_name not in response.cookies


def test_two_voters_and_clear(voter_client, event, question) -> None:
    alice, bob = voter_client(VOTER_A), voter_client(VOTER_B)

    assert _vote(alice, question.id, 1).json()["score"] == 1
    assert _vote(bob, question.id, 1).json()["score"] == 2

    cleared = _vote(alice, question.id, 0).json()
    assert cleared["score"] == 1
    assert cleared["my_vote"] is None

    assert _my_vote(bob, event.id) == 1
    assert _my_vote(alice, event.id) is None


@pytest.mark.parametrize("value", [2, -3, "up"])
def test_vote_invalid_value(voter_client, question, value) -> None:
    response = _vote(voter_client(VOTER_B), question.id, value)

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_vote_nonexistent_question(voter_client) -> None:
    response = _vote(voter_client(VOTER_B), 99999, 1)

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_vote_when_voting_closed(db_session, voter_client, event, question) -> None:
    bob = voter_client(VOTER_B)
    _vote(bob, question.id, 1)
    event.is_voting_open = False
    db_session.commit()

    response = _vote(bob, question.id, -1)

    assert response.status_code == status.HTTP_409_CONFLICT
    assert _my_vote(bob, event.id) == 1
