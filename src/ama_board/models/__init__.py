# src/ama_board/models/__init__.py
"""SQLAlchemy models for the AMA Board application."""

from .event import Event, EventStatus, EventType
from .question import Question, QuestionStatus
from .vote import QuestionVote

__all__ = [
    "Event", "EventStatus", "EventType",
    "Question", "QuestionStatus",
    "QuestionVote",
]
