from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from qa_forum.utils.clock import utc_now


class AnswerBase(SQLModel):
    content: str
    author_id: int = Field(foreign_key="useraccount.id", index=True, ondelete="CASCADE")
    # 删除问题时级联删除其全部回答
    question_id: int = Field(foreign_key="question.id", index=True, ondelete="CASCADE")
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class Answer(AnswerBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)


class AnswerRead(AnswerBase):
    id: int
    is_liked: bool = False
    like_count: int = 0
