# tests/v1/test_admin.py
"""Tests for the host console endpoints."""

from fastapi import status

from ama_board.models import EventType
from tests.conftest import make_event, make_question


def test_admin_list_requires_host(client) -> None:
    assert client.get("/api/v1/admin/events").status_code == status.HTTP_403_FORBIDDEN


def test_admin_list_includes_inactive_events(db_session, host_client, event) -> None:
    inactive = make_event(db_session, title="Archived", is_active=False)
    make_question(db_session, event)
    db_session.commit()

    body = host_client.get("/api/v1/admin/events").json()

    counts = {e["id"]: e["question_count"] for e in body}
    assert counts == {event.id: 1, inactive.id: 0}


def test_admin_partial_update(host_client, event) -> None:
    response = host_client.patch(f"/api/v1/admin/events/{event.id}", json={"is_active": False})

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["is_active"] is False
    assert body["title"] == event.title


def test_admin_update_without_fields(host_client, event) -> None:
    response = host_client.patch(f"/api/v1/admin/events/{event.id}", json={})

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_admin_update_forbidden_for_guest(client, event) -> None:
    response = client.patch(f"/api/v1/admin/events/{event.id}", json={"is_active": False})

    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_admin_can_delete_company_event(db_session, client, host_client) -> None:
    company = make_event(db_session, type=EventType.COMPANY, host_name=None)
    db_session.commit()

    assert client.delete(f"/api/v1/admin/events/{company.id}").status_code == status.HTTP_403_FORBIDDEN
    assert host_client.delete(f"/api/v1/admin/events/{company.id}").status_code == status.HTTP_200_OK
