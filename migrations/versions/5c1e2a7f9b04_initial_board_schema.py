"""initial board schema

Revision ID: 5c1e2a7f9b04
Revises:
Create Date: 2026-10-19 09:12:40.318204

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5c1e2a7f9b04"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

event_status = sa.Enum("OPEN", "CLOSED", name="event_status")
event_type = sa.Enum("company", "team", name="event_type")
question_status = sa.Enum("OPEN", "ANSWERED", name="question_status")


def upgrade() -> None:
    """Create events, questions and the vote ledger."""
    op.create_table(
        "event",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("starts_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("is_voting_open", sa.Boolean(), nullable=False),
        sa.Column("status", event_status, nullable=False),
        sa.Column("type", event_type, nullable=False),
        sa.Column("host_name", sa.Text(), nullable=True),
        sa.Column("created_by_voter_id", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "question",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("event_id", sa.Integer(), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("submitted_name", sa.Text(), nullable=True),
        sa.Column("is_anonymous", sa.Boolean(), nullable=False),
        sa.Column("submitter_id", sa.Text(), nullable=True),
        sa.Column("status", question_status, nullable=False),
        sa.Column("is_hidden", sa.Boolean(), nullable=False),
        sa.Column("pinned_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["event_id"], ["event.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_question_event_id_status", "question", ["event_id", "status"], unique=False
    )
    op.create_table(
        "question_vote",
        sa.Column("question_id", sa.Integer(), nullable=False),
        sa.Column("voter_id", sa.String(length=64), nullable=False),
        sa.Column("value", sa.SmallInteger(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("value IN (1, -1)", name="ck_question_vote_value"),
        sa.ForeignKeyConstraint(["question_id"], ["question.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("question_id", "voter_id"),
    )
    op.create_index("ix_question_vote_voter_id", "question_vote", ["voter_id"], unique=False)


def downgrade() -> None:
    """Drop the board schema."""
    op.drop_index("ix_question_vote_voter_id", table_name="question_vote")
    op.drop_table("question_vote")
    op.drop_index("ix_question_event_id_status", table_name="question")
    op.drop_table("question")
    op.drop_table("event")

    bind = op.get_bind()
    for enum_type in (question_status, event_type, event_status):
        enum_type.drop(bind, checkfirst=True)
