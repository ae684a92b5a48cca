from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from qa_forum.utils.clock import utc_now


class QuestionBase(SQLModel):
    title: str
    content: str
    author_id: int = Field(foreign_key="useraccount.id", index=True, ondelete="CASCADE")
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class Question(QuestionBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)


class QuestionRead(QuestionBase):
    """问题视图：附带当前查看者的点赞状态"""

    id: int
    is_liked: bool = False
    like_count: int = 0
