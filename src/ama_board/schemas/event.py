"""Event-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from ama_board.models import EventStatus, EventType


class EventCreate(BaseModel):
    """Schema for creating an event."""

    title: str = Field(..., description="Event title")
    starts_at: datetime | None = Field(None, description="Scheduled start time")
    type: EventType = Field(EventType.TEAM, description="company (host only) or team")
    host_name: str | None = Field(None, description="Required for team events")
    description: str | None = None


class EventUpdate(BaseModel):
    """Guest edit of a team event; `status=CLOSED` alone closes it."""

    title: str | None = None
    starts_at: datetime | None = None
    host_name: str | None = None
    description: str | None = None
    is_voting_open: bool | None = None
    status: Literal["CLOSED"] | None = None


class AdminEventUpdate(BaseModel):
    """Partial update from the host console; only fields sent are applied."""

    is_active: bool | None = None
    is_voting_open: bool | None = None
    title: str | None = None
    description: str | None = None
    starts_at: datetime | None = None


class EventResponse(BaseModel):
    """Event as returned by the API."""

    id: int
    title: str
    description: str | None
    starts_at: datetime | None
    is_active: bool
    is_voting_open: bool
    status: EventStatus
    type: EventType
    host_name: str | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class EventSummaryResponse(EventResponse):
    """Event with aggregate counts for listings."""

    question_count: int
    vote_count: int = 0


class BoardEventResponse(BaseModel):
    """Event header shown above a question board."""

    id: int
    title: str
    description: str | None
    starts_at: datetime | None
    is_voting_open: bool
    status: EventStatus
    type: EventType
    host_name: str | None

    model_config = ConfigDict(from_attributes=True)
