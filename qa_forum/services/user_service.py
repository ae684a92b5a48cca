from __future__ import annotations

from typing import List

from sqlmodel import select

from qa_forum.models.db import get_session
from qa_forum.models.user_account import UserAccount, UserRole
from qa_forum.services.errors import ForumError, NotFound
from qa_forum.services.permissions import check_admin
from qa_forum.utils.clock import utc_now
from qa_forum.utils.logging_config import get_logger

logger = get_logger(__name__)


class UserService:
    def list_users(self) -> List[UserAccount]:
        with get_session() as session:
            return list(session.exec(select(UserAccount).order_by(UserAccount.id)).all())

    def get_user(self, user_id: int) -> UserAccount:
        with get_session() as session:
            user = session.get(UserAccount, user_id)
            if not user:
                raise NotFound("user", user_id)
            return user

    def delete_user(self, user_id: int, acting_user: UserAccount) -> None:
        """删除用户（管理员功能）

        会话、点赞以及该用户发布的问题和回答由外键级联删除。

        Raises:
            PermissionDenied: 操作者不是管理员
            NotFound: 用户不存在
        """
        check_admin(acting_user, "delete", "user")
        with get_session() as session:
            user = session.get(UserAccount, user_id)
            if not user:
                raise NotFound("user", user_id)
            session.delete(user)
            session.commit()
            logger.info(f"User deleted: id={user_id} by admin={acting_user.id}")

    def update_role(self, user_id: int, role: str, acting_user: UserAccount) -> UserAccount:
        """修改用户角色（管理员功能），管理员不能修改自己的角色"""
        check_admin(acting_user, "update", "user")
        if user_id == acting_user.id:
            raise ForumError("You cannot change your own role", detail="cannot_modify_own_role")
        with get_session() as session:
            user = session.get(UserAccount, user_id)
            if not user:
                raise NotFound("user", user_id)
            user.role = UserRole(role).value
            user.updated_at = utc_now()
            session.add(user)
            session.commit()
            session.refresh(user)
            logger.info(f"User role updated: id={user_id} role={user.role} by admin={acting_user.id}")
            return user
