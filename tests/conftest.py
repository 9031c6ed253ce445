# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DATABASE_URL", "sqlite://")

from ama_board.core.security import create_host_token
from ama_board.core.settings import settings
from ama_board.db.session import Base, enable_sqlite_foreign_keys
from ama_board.db.session import get_db as app_get_session
from ama_board.main import app as fastapi_app
from ama_board.models import Event, EventStatus, EventType, Question, QuestionStatus, QuestionVote
from ama_board.schemas.question import BoardResponse, QuestionViewResponse

TEST_DB_URL = "sqlite://"
BASE_URL = "http://testserver"

VOTER_A = "voter-aaaaaaaa"
VOTER_B = "voter-bbbbbbbb"
VOTER_C = "voter-cccccccc"


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

        # Endpoints commit, so every test starts from empty tables.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    """Client without any cookies; the server issues a fresh voter id."""
    with TestClient(app, base_url=BASE_URL) as test_client:
        yield test_client


@pytest.fixture()
def voter_client(app: FastAPI) -> Iterator[Callable[[str], TestClient]]:
    """Factory for clients that present an existing voter cookie."""
    clients: list[TestClient] = []

    def _make(voter_id: str) -> TestClient:
        test_client = TestClient(
            app,
            base_url=BASE_URL,
            cookies={settings.voter_cookie_name: voter_id},
        )
        clients.append(test_client)
        return test_client

    yield _make
    for test_client in clients:
        test_client.close()


@pytest.fixture()
def host_headers() -> dict[str, str]:
    """Authorization headers carrying a valid host session."""
    return {"Authorization": f"Bearer {create_host_token()}"}


@pytest.fixture()
def host_client(app: FastAPI) -> Iterator[TestClient]:
    """Client holding the host session cookie."""
    with TestClient(
        app,
        base_url=BASE_URL,
        cookies={settings.host_cookie_name: create_host_token()},
    ) as test_client:
        yield test_client


def make_event(db: Session, **overrides: Any) -> Event:
    fields: dict[str, Any] = {
        "title": "All hands",
        "starts_at": datetime(2026, 10, 20, 16, 0, tzinfo=UTC),
        "type": EventType.TEAM,
        "host_name": "Platform team",
        "is_active": True,
        "is_voting_open": True,
        "status": EventStatus.OPEN,
    }
    fields.update(overrides)
    event = Event(**fields)
    db.add(event)
    db.flush()
    return event


def make_question(db: Session, event: Event, **overrides: Any) -> Question:
    fields: dict[str, Any] = {
        "event_id": event.id,
        "text": "What is the roadmap for next quarter?",
        "submitted_name": "Sam",
        "is_anonymous": False,
        "submitter_id": VOTER_A,
        "status": QuestionStatus.OPEN,
        "is_hidden": False,
    }
    fields.update(overrides)
    question = Question(**fields)
    db.add(question)
    db.flush()
    return question


def add_vote(db: Session, question: Question, voter_id: str, value: int) -> QuestionVote:
    vote = QuestionVote(question_id=question.id, voter_id=voter_id, value=value)
    db.add(vote)
    db.flush()
    return vote


def make_row(question_id: int, **overrides: Any) -> QuestionViewResponse:
    """Client-side board row as the API would serve it."""
    fields: dict[str, Any] = {
        "id": question_id,
        "event_id": 1,
        "text": f"Question {question_id}",
        "submitted_name": None,
        "is_anonymous": True,
        "status": QuestionStatus.OPEN,
        "is_hidden": False,
        "pinned_at": None,
        "created_at": datetime(2026, 10, 19, 12, 0, tzinfo=UTC) + timedelta(seconds=question_id),
        "score": 0,
        "my_vote": None,
        "is_own": False,
        "can_edit": False,
    }
    fields.update(overrides)
    return QuestionViewResponse(**fields)


@pytest.fixture()
def event(db_session: Session) -> Event:
    """An open team event accepting votes."""
    event = make_event(db_session)
    db_session.commit()
    return event


@pytest.fixture()
def question(db_session: Session, event: Event) -> Question:
    """An open question submitted by VOTER_A."""
    question = make_question(db_session, event)
    db_session.commit()
    return question


def make_snapshot(*rows: QuestionViewResponse) -> BoardResponse:
    """Board payload wrapping the given rows."""
    return BoardResponse.model_validate(
        {
            "event": {
                "id": 1,
                "title": "All hands",
                "description": None,
                "starts_at": None,
                "is_voting_open": True,
                "status": "OPEN",
                "type": "team",
                "host_name": "Core",
            },
            "questions": [row.model_dump() for row in rows],
            "metrics": {"question_count": len(rows), "vote_count": 0},
        }
    )
