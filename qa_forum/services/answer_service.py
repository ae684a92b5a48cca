from __future__ import annotations

from typing import List, Optional

from sqlmodel import Session, select

from qa_forum.models.answer import Answer, AnswerRead
from qa_forum.models.db import get_session
from qa_forum.models.question import Question
from qa_forum.models.user_account import UserAccount
from qa_forum.services.errors import NotFound
from qa_forum.services.like_service import AnswerTarget, LikeService
from qa_forum.services.permissions import check_owner_or_admin
from qa_forum.utils.clock import utc_now
from qa_forum.utils.logging_config import get_logger

logger = get_logger(__name__)


class AnswerService:
    def __init__(self, like_service: Optional[LikeService] = None) -> None:
        self.like_service = like_service or LikeService()

    def create_answer(self, question_id: int, content: str, author: UserAccount) -> AnswerRead:
        with get_session() as session:
            if not session.get(Question, question_id):
                raise NotFound("question", question_id)

            answer = Answer(content=content, author_id=author.id, question_id=question_id)
            session.add(answer)
            session.commit()
            session.refresh(answer)
            logger.info(f"Answer created: id={answer.id} question={question_id} author={author.id}")
            return self._view(answer, is_liked=False)

    def update_answer(
        self,
        answer_id: int,
        user: UserAccount,
        content: Optional[str] = None,
    ) -> AnswerRead:
        with get_session() as session:
            answer = self._get_or_fail(session, answer_id)
            check_owner_or_admin(answer.author_id, user, "update", "answer")

            answer.content = content or answer.content
            answer.updated_at = utc_now()
            session.add(answer)
            session.commit()
            session.refresh(answer)

            target = AnswerTarget(answer.id)
            # 作者不能给自己的回答点赞，无需查询
            is_liked = False
            if answer.author_id != user.id:
                is_liked = self.like_service.is_liked_by(target, user, session=session)
            return self._view(
                answer,
                is_liked=is_liked,
                like_count=self.like_service.count_likes(target, session=session),
            )

    def delete_answer(self, answer_id: int, user: UserAccount) -> None:
        with get_session() as session:
            answer = self._get_or_fail(session, answer_id)
            check_owner_or_admin(answer.author_id, user, "delete", "answer")
            session.delete(answer)
            session.commit()
            logger.info(f"Answer deleted: id={answer_id} by user={user.id}")

    def find_one(self, answer_id: int, viewer: Optional[UserAccount] = None) -> AnswerRead:
        with get_session() as session:
            answer = self._get_or_fail(session, answer_id)
            return self._to_response(session, answer, viewer)

    def find_all_by_question(
        self,
        question_id: int,
        viewer: Optional[UserAccount] = None,
    ) -> List[AnswerRead]:
        """列出问题下的全部回答，按创建时间升序"""
        with get_session() as session:
            if not session.get(Question, question_id):
                raise NotFound("question", question_id)
            answers = session.exec(
                select(Answer)
                .where(Answer.question_id == question_id)
                .order_by(Answer.created_at, Answer.id)
            ).all()
            return [self._to_response(session, answer, viewer) for answer in answers]

    def _to_response(
        self,
        session: Session,
        answer: Answer,
        viewer: Optional[UserAccount],
    ) -> AnswerRead:
        target = AnswerTarget(answer.id)
        return self._view(
            answer,
            is_liked=self.like_service.is_liked_by(target, viewer, session=session),
            like_count=self.like_service.count_likes(target, session=session),
        )

    @staticmethod
    def _get_or_fail(session: Session, answer_id: int) -> Answer:
        answer = session.get(Answer, answer_id)
        if not answer:
            raise NotFound("answer", answer_id)
        return answer

    @staticmethod
    def _view(answer: Answer, is_liked: bool = False, like_count: int = 0) -> AnswerRead:
        return AnswerRead.model_validate(
            answer, update={"is_liked": is_liked, "like_count": like_count}
        )
