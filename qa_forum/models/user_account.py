from datetime import datetime
from enum import Enum
from typing import Optional

from sqlmodel import Field, SQLModel

from qa_forum.utils.clock import as_utc, utc_now


class UserRole(str, Enum):
    """用户角色"""
    USER = "user"
    ADMIN = "admin"


class UserAccount(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    email: str = Field(index=True, unique=True)
    password_hash: str
    role: str = Field(default=UserRole.USER.value, index=True, description="用户角色：admin 或 user")
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class SessionToken(SQLModel, table=True):
    """登录会话，一行对应一个有效的 bearer token"""

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="useraccount.id", index=True, ondelete="CASCADE")
    token: str = Field(index=True, unique=True)
    created_at: datetime = Field(default_factory=utc_now)
    expires_at: Optional[datetime] = Field(default=None, description="过期时间，为空表示永不过期")

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        if self.expires_at is None:
            return False
        return as_utc(now or utc_now()) >= as_utc(self.expires_at)
