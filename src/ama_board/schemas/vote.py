"""Vote-related Pydantic schemas."""

from typing import Literal

from pydantic import BaseModel, Field


class VoteCreate(BaseModel):
    """Schema for setting or clearing a vote."""

    value: Literal[-1, 0, 1] = Field(..., description="1 upvote, -1 downvote, 0 clears the vote")


class VoteResponse(BaseModel):
    """Authoritative vote state returned after a write."""

    question_id: int
    score: int
    my_vote: Literal[-1, 1] | None
