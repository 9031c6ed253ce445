"""Typed failures raised by the board services.

Every write fails fast with one of these before any state is applied; the API
layer maps each class to a single HTTP status.
"""

from __future__ import annotations


class BoardError(RuntimeError):
    """Base exception for board rule violations."""

    status_code: int = 400
    default_detail: str = "Request could not be processed"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class NotFoundError(BoardError):
    """Referenced event or question does not exist."""

    status_code = 404
    default_detail = "Not found"


class VotingClosedError(BoardError):
    """Voting or submission attempted while the event or question does not accept it."""

    status_code = 409
    default_detail = "Voting is closed"


class ForbiddenError(BoardError):
    """Caller lacks host privilege or does not own the question.

    The message is deliberately the same for every cause.
    """

    status_code = 403
    default_detail = "Forbidden"


class WindowExpiredError(BoardError):
    """Edit or retract attempted after the submitter's edit window closed."""

    status_code = 403
    default_detail = "Edit window has expired"


class BoardValidationError(BoardError):
    """Submitted text or fields fail validation."""

    status_code = 400
    default_detail = "Invalid input"


def require_host(is_host: bool) -> None:
    """Raise ForbiddenError unless the caller holds host privilege."""
    if not is_host:
        raise ForbiddenError()
