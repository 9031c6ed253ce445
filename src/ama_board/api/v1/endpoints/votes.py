"""Vote-related endpoints for the AMA Board API."""

from fastapi import APIRouter

from ama_board.api.v1.dependencies import SessionDep, VoterDep
from ama_board.schemas.vote import VoteCreate, VoteResponse
from ama_board.services.ledger import cast_vote

router = APIRouter(prefix="/questions", tags=["votes"])


@router.post("/{question_id}/vote", response_model=VoteResponse)
async def vote_on_question(
    question_id: int,
    vote_data: VoteCreate,
    db: SessionDep,
    voter: VoterDep,
) -> VoteResponse:
    """Set (1/-1) or clear (0) the caller's vote and return the new score.

    The body carries the already-resolved target value; toggling is decided
    by the client.
    """
    result = cast_vote(db, question_id, voter.voter_id, vote_data.value)
    db.commit()
    return VoteResponse(
        question_id=result.question_id,
        score=result.score,
        my_vote=result.my_vote,  # type: ignore[arg-type]
    )

