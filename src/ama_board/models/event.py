"""SQLAlchemy models for Q&A events."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, Enum, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ama_board.db.session import Base
from ama_board.db.time import utcnow

if TYPE_CHECKING:
    from .question import Question


class EventType(str, enum.Enum):
    """Broad company-wide events versus team-scoped ones."""

    COMPANY = "company"
    TEAM = "team"


class EventStatus(str, enum.Enum):
    """Lifecycle status; closed events show up under past events."""

    OPEN = "OPEN"
    CLOSED = "CLOSED"


class Event(Base):
    """A Q&A session that owns a board of questions."""

    __tablename__ = "event"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    starts_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # Inactive events are hidden from the public listing and reject submissions.
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_voting_open: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    status: Mapped[EventStatus] = mapped_column(
        Enum(EventStatus, name="event_status"),
        nullable=False,
        default=EventStatus.OPEN,
    )
    type: Mapped[EventType] = mapped_column(
        Enum(EventType, name="event_type", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=EventType.TEAM,
    )
    host_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by_voter_id: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    questions: Mapped[list[Question]] = relationship(
        "Question",
        back_populates="event",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def is_closed(self) -> bool:
        """Return True once the event has been closed."""
        return self.status == EventStatus.CLOSED
