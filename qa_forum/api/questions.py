from typing import List, Optional

from fastapi import APIRouter, Depends

from qa_forum.api.auth import get_current_user, get_optional_user
from qa_forum.api.schemas import (
    CreateQuestionRequest,
    DeleteResponse,
    UpdateQuestionRequest,
)
from qa_forum.models.question import QuestionRead
from qa_forum.models.user_account import UserAccount
from qa_forum.services.question_service import QuestionService

router = APIRouter(prefix="/questions", tags=["questions"])

question_service = QuestionService()


@router.post("", response_model=QuestionRead)
def create_question(
    payload: CreateQuestionRequest,
    current_user: UserAccount = Depends(get_current_user),
):
    return question_service.create_question(
        title=payload.title,
        content=payload.content,
        author=current_user,
    )


@router.patch("", response_model=QuestionRead)
def update_question(
    payload: UpdateQuestionRequest,
    current_user: UserAccount = Depends(get_current_user),
):
    """更新问题，请求体中携带问题 ID"""
    return question_service.update_question(
        payload.id,
        current_user,
        title=payload.title,
        content=payload.content,
    )


@router.delete("/{question_id}", response_model=DeleteResponse)
def delete_question(question_id: int, current_user: UserAccount = Depends(get_current_user)):
    question_service.delete_question(question_id, current_user)
    return DeleteResponse(deleted=True)


@router.get("", response_model=List[QuestionRead])
def list_questions(viewer: Optional[UserAccount] = Depends(get_optional_user)):
    return question_service.find_all(viewer)


@router.get("/{question_id}", response_model=QuestionRead)
def get_question(question_id: int, viewer: Optional[UserAccount] = Depends(get_optional_user)):
    return question_service.find_one(question_id, viewer)
