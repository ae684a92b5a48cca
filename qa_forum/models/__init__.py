"""Database models and configuration"""

from qa_forum.models.db import init_db, get_session, engine
from qa_forum.models.user_account import SessionToken, UserAccount, UserRole
from qa_forum.models.question import Question, QuestionRead
from qa_forum.models.answer import Answer, AnswerRead
from qa_forum.models.like import Like

__all__ = [
    # Database
    "init_db",
    "get_session",
    "engine",
    # Models
    "UserAccount",
    "UserRole",
    "SessionToken",
    "Question",
    "QuestionRead",
    "Answer",
    "AnswerRead",
    "Like",
]
