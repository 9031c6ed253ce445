"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .auth import LoginRequest, SessionResponse
from .event import (
    AdminEventUpdate,
    BoardEventResponse,
    EventCreate,
    EventResponse,
    EventSummaryResponse,
    EventUpdate,
)
from .question import (
    BoardMetricsResponse,
    BoardResponse,
    QuestionCreate,
    QuestionEdit,
    QuestionResponse,
    QuestionViewResponse,
)
from .vote import VoteCreate, VoteResponse

__all__ = [
    "LoginRequest", "SessionResponse",
    "AdminEventUpdate", "BoardEventResponse", "EventCreate", "EventResponse",
    "EventSummaryResponse", "EventUpdate",
    "BoardMetricsResponse", "BoardResponse", "QuestionCreate", "QuestionEdit",
    "QuestionResponse", "QuestionViewResponse",
    "VoteCreate", "VoteResponse",
]
