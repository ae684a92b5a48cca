from __future__ import annotations

from typing import List, Optional

from sqlmodel import Session, select

from qa_forum.models.db import get_session
from qa_forum.models.question import Question, QuestionRead
from qa_forum.models.user_account import UserAccount
from qa_forum.services.errors import NotFound
from qa_forum.services.like_service import LikeService, QuestionTarget
from qa_forum.services.permissions import check_owner_or_admin
from qa_forum.utils.clock import utc_now
from qa_forum.utils.logging_config import get_logger

logger = get_logger(__name__)


class QuestionService:
    def __init__(self, like_service: Optional[LikeService] = None) -> None:
        self.like_service = like_service or LikeService()

    def create_question(self, title: str, content: str, author: UserAccount) -> QuestionRead:
        with get_session() as session:
            question = Question(title=title, content=content, author_id=author.id)
            session.add(question)
            session.commit()
            session.refresh(question)
            logger.info(f"Question created: id={question.id} author={author.id}")
            # 新建的问题不可能已被点赞
            return self._view(question, is_liked=False)

    def update_question(
        self,
        question_id: int,
        user: UserAccount,
        title: Optional[str] = None,
        content: Optional[str] = None,
    ) -> QuestionRead:
        """更新问题标题或内容，仅作者或管理员可操作

        未提供（或为空）的字段保持原值。
        """
        with get_session() as session:
            question = self._get_or_fail(session, question_id)
            check_owner_or_admin(question.author_id, user, "update", "question")

            question.title = title or question.title
            question.content = content or question.content
            question.updated_at = utc_now()
            session.add(question)
            session.commit()
            session.refresh(question)

            target = QuestionTarget(question.id)
            is_liked = False
            if question.author_id != user.id:
                is_liked = self.like_service.is_liked_by(target, user, session=session)
            return self._view(
                question,
                is_liked=is_liked,
                like_count=self.like_service.count_likes(target, session=session),
            )

    def delete_question(self, question_id: int, user: UserAccount) -> None:
        """删除问题，数据库外键级联删除其回答及全部点赞"""
        with get_session() as session:
            question = self._get_or_fail(session, question_id)
            check_owner_or_admin(question.author_id, user, "delete", "question")
            session.delete(question)
            session.commit()
            logger.info(f"Question deleted: id={question_id} by user={user.id}")

    def find_all(self, viewer: Optional[UserAccount] = None) -> List[QuestionRead]:
        with get_session() as session:
            questions = session.exec(
                select(Question).order_by(Question.created_at.desc(), Question.id.desc())
            ).all()
            return [self._to_response(session, question, viewer) for question in questions]

    def find_one(self, question_id: int, viewer: Optional[UserAccount] = None) -> QuestionRead:
        with get_session() as session:
            question = self._get_or_fail(session, question_id)
            return self._to_response(session, question, viewer)

    def _to_response(
        self,
        session: Session,
        question: Question,
        viewer: Optional[UserAccount],
    ) -> QuestionRead:
        target = QuestionTarget(question.id)
        return self._view(
            question,
            is_liked=self.like_service.is_liked_by(target, viewer, session=session),
            like_count=self.like_service.count_likes(target, session=session),
        )

    @staticmethod
    def _get_or_fail(session: Session, question_id: int) -> Question:
        question = session.get(Question, question_id)
        if not question:
            raise NotFound("question", question_id)
        return question

    @staticmethod
    def _view(question: Question, is_liked: bool = False, like_count: int = 0) -> QuestionRead:
        return QuestionRead.model_validate(
            question, update={"is_liked": is_liked, "like_count": like_count}
        )
