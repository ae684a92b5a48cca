from typing import List, Optional

from fastapi import APIRouter, Depends

from qa_forum.api.auth import get_current_user, get_optional_user
from qa_forum.api.schemas import (
    CreateAnswerRequest,
    DeleteResponse,
    UpdateAnswerRequest,
)
from qa_forum.models.answer import AnswerRead
from qa_forum.models.user_account import UserAccount
from qa_forum.services.answer_service import AnswerService

router = APIRouter(prefix="/answers", tags=["answers"])

answer_service = AnswerService()


@router.post("", response_model=AnswerRead)
def create_answer(
    payload: CreateAnswerRequest,
    current_user: UserAccount = Depends(get_current_user),
):
    return answer_service.create_answer(
        question_id=payload.question_id,
        content=payload.content,
        author=current_user,
    )


@router.patch("/{answer_id}", response_model=AnswerRead)
def update_answer(
    answer_id: int,
    payload: UpdateAnswerRequest,
    current_user: UserAccount = Depends(get_current_user),
):
    return answer_service.update_answer(answer_id, current_user, content=payload.content)


@router.delete("/{answer_id}", response_model=DeleteResponse)
def delete_answer(answer_id: int, current_user: UserAccount = Depends(get_current_user)):
    answer_service.delete_answer(answer_id, current_user)
    return DeleteResponse(deleted=True)


@router.get("/{question_id}", response_model=List[AnswerRead])
def list_answers(question_id: int, viewer: Optional[UserAccount] = Depends(get_optional_user)):
    """列出问题下的回答"""
    return answer_service.find_all_by_question(question_id, viewer)
