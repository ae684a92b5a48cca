"""点赞服务

点赞目标是问题或回答。两种目标的差异（查找实体、过滤外键、构造记录、
错误信息中的名词）都封装在 LikeTarget 的子类中，LikeService 只面向接口编程。
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Union

from sqlalchemy.exc import IntegrityError
from sqlalchemy import func
from sqlmodel import Session, select

from qa_forum.models.answer import Answer
from qa_forum.models.db import get_session
from qa_forum.models.like import Like
from qa_forum.models.question import Question
from qa_forum.models.user_account import UserAccount
from qa_forum.services.errors import NotFound, SelfLikeForbidden
from qa_forum.utils.logging_config import get_logger

logger = get_logger(__name__)


class LikeTargetKind(str, Enum):
    """点赞目标类型"""
    QUESTION = "question"
    ANSWER = "answer"


class LikeTarget(ABC):
    """点赞目标（问题或回答）"""

    kind: LikeTargetKind

    def __init__(self, target_id: int):
        self.id = target_id

    @property
    def noun(self) -> str:
        return self.kind.value

    @property
    def label(self) -> str:
        return self.kind.value.capitalize()

    @abstractmethod
    def load(self, session: Session) -> Optional[Union[Question, Answer]]:
        """加载目标实体，不存在时返回 None"""

    @abstractmethod
    def like_column(self):
        """Like 表中指向该类目标的外键列"""

    @abstractmethod
    def new_like(self, user_id: int) -> Like:
        """构造一条指向该目标的点赞记录"""

    def like_filter(self):
        return self.like_column() == self.id

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LikeTarget):
            return NotImplemented
        return self.kind == other.kind and self.id == other.id

    def __hash__(self) -> int:
        return hash((self.kind, self.id))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.id})"


class QuestionTarget(LikeTarget):
    kind = LikeTargetKind.QUESTION

    def load(self, session: Session) -> Optional[Question]:
        return session.get(Question, self.id)

    def like_column(self):
        return Like.question_id

    def new_like(self, user_id: int) -> Like:
        return Like(user_id=user_id, question_id=self.id)


class AnswerTarget(LikeTarget):
    kind = LikeTargetKind.ANSWER

    def load(self, session: Session) -> Optional[Answer]:
        return session.get(Answer, self.id)

    def like_column(self):
        return Like.answer_id

    def new_like(self, user_id: int) -> Like:
        return Like(user_id=user_id, answer_id=self.id)


class LikeService:
    def is_liked_by(
        self,
        target: LikeTarget,
        user: Optional[UserAccount],
        session: Optional[Session] = None,
    ) -> bool:
        """user 是否已点赞 target；匿名用户恒为 False"""
        if user is None:
            return False
        if session is not None:
            return self._find_like(session, target, user.id) is not None
        with get_session() as session:
            return self._find_like(session, target, user.id) is not None

    def count_likes(self, target: LikeTarget, session: Optional[Session] = None) -> int:
        statement = select(func.count()).select_from(Like).where(target.like_filter())
        if session is not None:
            return session.exec(statement).one()
        with get_session() as session:
            return session.exec(statement).one()

    def toggle(self, target: LikeTarget, user: UserAccount) -> bool:
        """切换点赞状态

        Returns:
            bool: 切换后的状态，True 表示已点赞

        Raises:
            NotFound: 目标不存在
            SelfLikeForbidden: 给自己的内容点赞
        """
        with get_session() as session:
            entity = target.load(session)
            if entity is None:
                raise NotFound(target.noun, target.id)

            existing = self._find_like(session, target, user.id)
            if existing:
                session.delete(existing)
                session.commit()
                logger.info(f"Like removed: user={user.id} target={target!r}")
                return False

            if entity.author_id == user.id:
                raise SelfLikeForbidden(target.noun)

            session.add(target.new_like(user.id))
            try:
                session.commit()
            except IntegrityError:
                session.rollback()
                # 并发请求已插入同一条点赞，唯一约束拒绝了本次插入
                if self._find_like(session, target, user.id) is None:
                    raise
                logger.warning(f"Concurrent like detected: user={user.id} target={target!r}")
                return True
            logger.info(f"Like added: user={user.id} target={target!r}")
            return True

    @staticmethod
    def toggle_message(target: LikeTarget) -> str:
        return f"{target.label} like status toggled"

    def _find_like(self, session: Session, target: LikeTarget, user_id: int) -> Optional[Like]:
        return session.exec(
            select(Like).where(target.like_filter(), Like.user_id == user_id)
        ).first()
