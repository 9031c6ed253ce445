# tests/v1/test_system.py
"""Tests for the public configuration endpoint."""

from fastapi import status

from ama_board.core.settings import settings


def test_public_config(client) -> None:
    response = client.get("/api/v1/system/config")

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["questions"]["edit_window_seconds"] == settings.edit_window_seconds
    assert body["questions"]["sort_modes"] == ["score", "newest"]
    assert body["polling"]["presenter_interval_seconds"] == [3, 5, 10]
    assert body["voter_cookie"] == settings.voter_cookie_name


def test_public_config_has_no_secrets(client) -> None:
    text = client.get("/api/v1/system/config").text

    assert settings.secret_key not in text
    assert "database" not in text
