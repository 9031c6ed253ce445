# src/ama_board/models/vote.py
"""Models capturing voting interactions on questions."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    SmallInteger,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ama_board.db.session import Base
from ama_board.db.time import utcnow

if TYPE_CHECKING:
    from .question import Question


class QuestionVote(Base):
    """Signed vote cast by one anonymous voter on one question."""

    __tablename__ = "question_vote"
    __table_args__ = (
        CheckConstraint("value IN (1, -1)", name="ck_question_vote_value"),
        Index("ix_question_vote_voter_id", "voter_id"),
    )

    question_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("question.id", ondelete="CASCADE"),
        primary_key=True,
    )
    voter_id: Mapped[str] = mapped_column(String(64), primary_key=True)

    # Composite primary key is the one-vote-per-voter guarantee; upserts target it.

    # 1 = upvote, -1 = downvote. Clearing a vote deletes the row.
    value: Mapped[int] = mapped_column(SmallInteger, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    question: Mapped[Question] = relationship("Question", back_populates="votes")
