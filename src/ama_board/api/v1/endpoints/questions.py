"""Question lifecycle endpoints: submitter edits and host triage."""

from fastapi import APIRouter
from sqlalchemy.orm import Session

from ama_board.api.v1.dependencies import IsHostDep, SessionDep, VoterDep
from ama_board.models import Question, QuestionStatus
from ama_board.schemas.question import QuestionEdit, QuestionResponse
from ama_board.services import questions as question_service

router = APIRouter(prefix="/questions", tags=["questions"])


def _committed(db: Session, question: Question) -> Question:
    db.commit()
    db.refresh(question)
    return question


@router.patch("/{question_id}", response_model=QuestionResponse)
async def edit_question(
    question_id: int,
    payload: QuestionEdit,
    db: SessionDep,
    voter: VoterDep,
) -> Question:
    """Edit the caller's own question while the edit window is open."""
    question = question_service.edit_question(
        db, question_id, voter_id=voter.voter_id, text=payload.text
    )
    return _committed(db, question)


@router.delete("/{question_id}")
async def retract_question(
    question_id: int,
    db: SessionDep,
    voter: VoterDep,
) -> dict[str, bool]:
    """Retract the caller's own question while the edit window is open."""
    question_service.retract_question(db, question_id, voter_id=voter.voter_id)
    db.commit()
    return {"success": True}


@router.post("/{question_id}/answer", response_model=QuestionResponse)
async def mark_answered(question_id: int, db: SessionDep, is_host: IsHostDep) -> Question:
    """Mark a question as answered (host)."""
    question = question_service.set_status(
        db, question_id, QuestionStatus.ANSWERED, is_host=is_host
    )
    return _committed(db, question)


@router.delete("/{question_id}/answer", response_model=QuestionResponse)
async def reopen_question(question_id: int, db: SessionDep, is_host: IsHostDep) -> Question:
    """Move an answered question back to open (host)."""
    question = question_service.set_status(db, question_id, QuestionStatus.OPEN, is_host=is_host)
    return _committed(db, question)


@router.post("/{question_id}/hide", response_model=QuestionResponse)
async def hide_question(question_id: int, db: SessionDep, is_host: IsHostDep) -> Question:
    """Suppress a question from the public board without answering it (host)."""
    question = question_service.set_hidden(db, question_id, True, is_host=is_host)
    return _committed(db, question)


@router.delete("/{question_id}/hide", response_model=QuestionResponse)
async def unhide_question(question_id: int, db: SessionDep, is_host: IsHostDep) -> Question:
    """Show a hidden question again (host)."""
    question = question_service.set_hidden(db, question_id, False, is_host=is_host)
    return _committed(db, question)


@router.post("/{question_id}/pin", response_model=QuestionResponse)
async def pin_question(question_id: int, db: SessionDep, is_host: IsHostDep) -> Question:
    """Pin a question to the top of every ranking (host)."""
    question = question_service.set_pinned(db, question_id, True, is_host=is_host)
    return _committed(db, question)


@router.delete("/{question_id}/pin", response_model=QuestionResponse)
async def unpin_question(question_id: int, db: SessionDep, is_host: IsHostDep) -> Question:
    """Unpin a question (host)."""
    question = question_service.set_pinned(db, question_id, False, is_host=is_host)
    return _committed(db, question)
