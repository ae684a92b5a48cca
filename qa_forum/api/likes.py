from fastapi import APIRouter, Depends

from qa_forum.api.auth import get_current_user
from qa_forum.api.schemas import LikeToggleResponse
from qa_forum.models.user_account import UserAccount
from qa_forum.services.like_service import (
    AnswerTarget,
    LikeService,
    LikeTarget,
    QuestionTarget,
)

router = APIRouter(prefix="/like", tags=["likes"])

like_service = LikeService()


def _toggle(target: LikeTarget, user: UserAccount) -> LikeToggleResponse:
    liked = like_service.toggle(target, user)
    return LikeToggleResponse(message=like_service.toggle_message(target), liked=liked)


@router.patch("/question/{question_id}", response_model=LikeToggleResponse)
def toggle_question_like(question_id: int, current_user: UserAccount = Depends(get_current_user)):
    return _toggle(QuestionTarget(question_id), current_user)


@router.patch("/answer/{answer_id}", response_model=LikeToggleResponse)
def toggle_answer_like(answer_id: int, current_user: UserAccount = Depends(get_current_user)):
    return _toggle(AnswerTarget(answer_id), current_user)
