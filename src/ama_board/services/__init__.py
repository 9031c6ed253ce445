# src/ama_board/services/__init__.py
"""Business logic services for the AMA Board application."""

from .board import BoardMetrics, BoardSnapshot, list_questions
from .errors import (
    BoardError,
    BoardValidationError,
    ForbiddenError,
    NotFoundError,
    VotingClosedError,
    WindowExpiredError,
)
from .ledger import VoteResult, cast_vote
from .ranking import QuestionView, SortMode, project
from .voter import VoterIdentity, resolve_voter

__all__ = [
    "BoardMetrics", "BoardSnapshot", "list_questions",
    "BoardError", "BoardValidationError", "ForbiddenError", "NotFoundError",
    "VotingClosedError", "WindowExpiredError",
    "VoteResult", "cast_vote",
    "QuestionView", "SortMode", "project",
    "VoterIdentity", "resolve_voter",
]
