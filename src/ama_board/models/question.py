"""SQLAlchemy models for submitted questions."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ama_board.db.session import Base
from ama_board.db.time import utcnow

if TYPE_CHECKING:
    from .event import Event
    from .vote import QuestionVote


class QuestionStatus(str, enum.Enum):
    """Primary triage status of a question."""

    OPEN = "OPEN"
    ANSWERED = "ANSWERED"


class Question(Base):
    """A question submitted to an event.

    Status, hidden and pinned are independent fields; a question can be
    answered and pinned, or open and hidden, at the same time.
    """

    __tablename__ = "question"
    __table_args__ = (Index("ix_question_event_id_status", "event_id", "status"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    event_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("event.id", ondelete="CASCADE"),
        nullable=False,
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    submitted_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_anonymous: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Kept even for anonymous submissions; grants edit/retract rights only.
    submitter_id: Mapped[str | None] = mapped_column(Text, nullable=True)

    status: Mapped[QuestionStatus] = mapped_column(
        Enum(QuestionStatus, name="question_status"),
        nullable=False,
        default=QuestionStatus.OPEN,
    )
    is_hidden: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # NULL = not pinned; the timestamp orders pinned questions among themselves.
    pinned_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    event: Mapped[Event] = relationship("Event", back_populates="questions")
    votes: Mapped[list[QuestionVote]] = relationship(
        "QuestionVote",
        back_populates="question",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
