from datetime import datetime
from typing import Optional

from sqlalchemy import CheckConstraint, UniqueConstraint
from sqlmodel import Field, SQLModel

from qa_forum.utils.clock import utc_now


class Like(SQLModel, table=True):
    """点赞记录

    目标是问题或回答二者之一；同一用户对同一目标最多一条记录，
    由唯一约束保证，并发的重复点赞会在插入时失败。
    """

    __table_args__ = (
        UniqueConstraint("user_id", "question_id", name="uq_like_user_question"),
        UniqueConstraint("user_id", "answer_id", name="uq_like_user_answer"),
        CheckConstraint(
            "(question_id IS NULL) <> (answer_id IS NULL)",
            name="ck_like_single_target",
        ),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="useraccount.id", index=True, ondelete="CASCADE")
    question_id: Optional[int] = Field(
        default=None, foreign_key="question.id", index=True, ondelete="CASCADE"
    )
    answer_id: Optional[int] = Field(
        default=None, foreign_key="answer.id", index=True, ondelete="CASCADE"
    )
    created_at: datetime = Field(default_factory=utc_now)
