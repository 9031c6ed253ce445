"""Async HTTP client for the board API.

The underlying `httpx.AsyncClient` keeps the voter cookie issued by the
server, so every call from one `BoardClient` is attributed to one voter.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ama_board.core.settings import settings
from ama_board.schemas.question import BoardResponse, QuestionResponse, QuestionViewResponse
from ama_board.schemas.vote import VoteResponse
from ama_board.services.ranking import SortMode

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"

ModelT = TypeVar("ModelT", bound=BaseModel)


class ClientError(RuntimeError):
    """Base exception for failed board API calls."""


class NetworkError(ClientError):
    """Transport-level failure: the request may or may not have been applied."""


class ApiError(ClientError):
    """The server answered with an error status."""

    def __init__(self, status_code: int, detail: str) -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"{status_code}: {detail}")


class BoardClient:
    """Thin typed wrapper around the v1 board endpoints."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
        host_token: str | None = None,
    ) -> None:
        headers = {"Authorization": f"Bearer {host_token}"} if host_token else None
        self._http = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers=headers,
        )

    async def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._http.aclose()

    async def __aenter__(self) -> BoardClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    @property
    def voter_id(self) -> str | None:
        """Voter id the server has issued to this client, if any."""
        for cookie in self._http.cookies.jar:
            if cookie.name == settings.voter_cookie_name:
                return cookie.value
        return None

    async def _request(
        self, method: str, path: str, model: type[ModelT] | None = None, **kwargs: Any
    ) -> Any:
        """Send a request and decode the body, validating it against `model` if given.

        Anything other than a well-formed reply (transport failure, error
        status, non-JSON body, unexpected payload) surfaces as a `ClientError`.
        """
        try:
            response = await self._http.request(method, f"{API_PREFIX}{path}", **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise NetworkError(str(exc)) from exc

        if response.is_error:
            try:
                detail = response.json().get("detail", response.text)
            except (ValueError, AttributeError):
                detail = response.text
            raise ApiError(response.status_code, str(detail))
        try:
            data = response.json()
        except ValueError as exc:
            logger.warning("%s %s returned a non-JSON body", method, path)
            raise ApiError(response.status_code, "Invalid response body") from exc
        if model is None:
            return data
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            logger.warning("%s %s returned an unexpected payload: %s", method, path, exc)
            raise ApiError(response.status_code, f"Unexpected {model.__name__} payload") from exc

    async def fetch_board(self, event_id: int, sort_mode: SortMode = SortMode.SCORE) -> BoardResponse:
        """Fetch the ranked board for an event."""
        return await self._request(
            "GET",
            f"/events/{event_id}/questions",
            BoardResponse,
            params={"sort": sort_mode.value},
        )

    async def cast_vote(self, question_id: int, value: int) -> VoteResponse:
        """Send an already-resolved vote value (1, -1 or 0)."""
        return await self._request(
            "POST", f"/questions/{question_id}/vote", VoteResponse, json={"value": value}
        )

    async def submit_question(
        self,
        event_id: int,
        text: str,
        *,
        submitted_name: str | None = None,
        is_anonymous: bool = False,
    ) -> QuestionViewResponse:
        """Submit a question to an event."""
        return await self._request(
            "POST",
            f"/events/{event_id}/questions",
            QuestionViewResponse,
            json={
                "text": text,
                "submitted_name": submitted_name,
                "is_anonymous": is_anonymous,
            },
        )

    async def edit_question(self, question_id: int, text: str) -> QuestionResponse:
        """Edit one of this voter's questions."""
        return await self._request(
            "PATCH", f"/questions/{question_id}", QuestionResponse, json={"text": text}
        )

    async def retract_question(self, question_id: int) -> None:
        """Retract one of this voter's questions."""
        await self._request("DELETE", f"/questions/{question_id}")

    async def set_answered(self, question_id: int, answered: bool) -> QuestionResponse:
        """Mark a question answered or reopen it (host)."""
        method = "POST" if answered else "DELETE"
        return await self._request(method, f"/questions/{question_id}/answer", QuestionResponse)

    async def set_hidden(self, question_id: int, hidden: bool) -> QuestionResponse:
        """Hide or unhide a question (host)."""
        method = "POST" if hidden else "DELETE"
        return await self._request(method, f"/questions/{question_id}/hide", QuestionResponse)

    async def set_pinned(self, question_id: int, pinned: bool) -> QuestionResponse:
        """Pin or unpin a question (host)."""
        method = "POST" if pinned else "DELETE"
        return await self._request(method, f"/questions/{question_id}/pin", QuestionResponse)
