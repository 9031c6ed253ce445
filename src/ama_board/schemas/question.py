"""Question and board Pydantic schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from ama_board.models import QuestionStatus

from .event import BoardEventResponse


class QuestionCreate(BaseModel):
    """Schema for submitting a question."""

    text: str = Field(..., description="Question text, trimmed server-side")
    submitted_name: str | None = Field(None, description="Display name unless anonymous")
    is_anonymous: bool = False


class QuestionEdit(BaseModel):
    """Schema for the submitter's text edit."""

    text: str


class QuestionResponse(BaseModel):
    """Question fields after a host transition or edit."""

    id: int
    event_id: int
    text: str
    submitted_name: str | None
    is_anonymous: bool
    status: QuestionStatus
    is_hidden: bool
    pinned_at: datetime | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class QuestionViewResponse(BaseModel):
    """A question annotated for the calling voter."""

    id: int
    event_id: int
    text: str
    submitted_name: str | None
    is_anonymous: bool
    status: QuestionStatus
    is_hidden: bool
    pinned_at: datetime | None
    created_at: datetime
    score: int
    my_vote: Literal[-1, 1] | None
    is_own: bool
    can_edit: bool

    model_config = ConfigDict(from_attributes=True)


class BoardMetricsResponse(BaseModel):
    """Aggregate counts over the listed questions."""

    question_count: int
    vote_count: int

    model_config = ConfigDict(from_attributes=True)


class BoardResponse(BaseModel):
    """Full board payload served to polling clients."""

    event: BoardEventResponse
    questions: list[QuestionViewResponse]
    metrics: BoardMetricsResponse

    model_config = ConfigDict(from_attributes=True)
