from __future__ import annotations

import os
import secrets
from datetime import timedelta
from typing import Optional

import bcrypt
from sqlmodel import select

from qa_forum.models.db import get_session
from qa_forum.models.user_account import SessionToken, UserAccount, UserRole
from qa_forum.services.errors import EmailAlreadyExists, Unauthenticated
from qa_forum.utils.clock import utc_now
from qa_forum.utils.logging_config import get_logger

logger = get_logger(__name__)

# 会话有效期（小时），0 表示永不过期
SESSION_TTL_HOURS = float(os.getenv("QA_FORUM_SESSION_TTL_HOURS", "168"))

BCRYPT_ROUNDS = int(os.getenv("QA_FORUM_BCRYPT_ROUNDS", "12"))

DEFAULT_ADMIN_EMAIL = os.getenv("QA_FORUM_ADMIN_EMAIL", "admin@example.com")
DEFAULT_ADMIN_PASSWORD = os.getenv("QA_FORUM_ADMIN_PASSWORD", "admin123")


class AuthService:
    """注册、登录以及 bearer token 会话管理"""

    def __init__(self, session_ttl_hours: Optional[float] = None) -> None:
        ttl = SESSION_TTL_HOURS if session_ttl_hours is None else session_ttl_hours
        self.session_ttl = timedelta(hours=ttl) if ttl > 0 else None

    def register_user(
        self,
        name: str,
        email: str,
        password: str,
        role: str = UserRole.USER.value,
    ) -> UserAccount:
        with get_session() as session:
            existing = session.exec(
                select(UserAccount).where(UserAccount.email == email)
            ).first()
            if existing:
                raise EmailAlreadyExists("Email already in use")

            user = UserAccount(
                name=name,
                email=email,
                password_hash=self._hash_password(password),
                role=UserRole(role).value,
            )
            session.add(user)
            session.commit()
            session.refresh(user)
            logger.info(f"User registered: id={user.id} email={email}")
            return user

    def authenticate(self, email: str, password: str) -> Optional[UserAccount]:
        with get_session() as session:
            user = session.exec(
                select(UserAccount).where(UserAccount.email == email)
            ).first()
            if not user:
                return None
            if not self._verify_password(password, user.password_hash):
                return None
            return user

    def login(self, email: str, password: str) -> str:
        """校验凭据并签发新的 token

        Returns:
            str: 原始 token，只在此处返回一次

        Raises:
            Unauthenticated: 用户不存在或密码错误
        """
        user = self.authenticate(email, password)
        if not user:
            logger.warning(f"Login failed for {email}")
            raise Unauthenticated("Invalid credentials", detail="invalid_credentials")
        token = self.create_token(user.id)
        logger.info(f"User logged in: id={user.id}")
        return token.token

    def create_token(self, user_id: int) -> SessionToken:
        token_value = secrets.token_hex(32)
        now = utc_now()
        expires_at = now + self.session_ttl if self.session_ttl else None
        with get_session() as session:
            token = SessionToken(
                user_id=user_id,
                token=token_value,
                created_at=now,
                expires_at=expires_at,
            )
            session.add(token)
            session.commit()
            session.refresh(token)
            return token

    def logout(self, token_value: str) -> None:
        """删除会话；未知 token 直接忽略"""
        with get_session() as session:
            token = session.exec(
                select(SessionToken).where(SessionToken.token == token_value)
            ).first()
            if not token:
                return
            session.delete(token)
            session.commit()
            logger.info(f"User logged out: id={token.user_id}")

    def get_user_by_token(self, token_value: str) -> Optional[UserAccount]:
        with get_session() as session:
            token = session.exec(
                select(SessionToken).where(SessionToken.token == token_value)
            ).first()
            if not token:
                return None
            if token.is_expired():
                # 过期会话在第一次使用时清理
                session.delete(token)
                session.commit()
                logger.info(f"Expired session removed: user_id={token.user_id}")
                return None
            return session.get(UserAccount, token.user_id)

    def validate_token(self, token_value: str) -> UserAccount:
        user = self.get_user_by_token(token_value)
        if not user:
            raise Unauthenticated("Invalid token")
        return user

    def _hash_password(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def _verify_password(self, password: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
        except ValueError:
            return False

    def ensure_default_admin(
        self,
        email: str = DEFAULT_ADMIN_EMAIL,
        password: str = DEFAULT_ADMIN_PASSWORD,
    ) -> None:
        """确保存在默认管理员账号

        如果数据库中没有任何管理员账号，则创建一个默认管理员。

        Args:
            email: 默认管理员邮箱
            password: 默认管理员密码
        """
        with get_session() as session:
            admin_exists = session.exec(
                select(UserAccount).where(UserAccount.role == UserRole.ADMIN.value)
            ).first()
            if admin_exists:
                return

            admin = UserAccount(
                name="admin",
                email=email,
                password_hash=self._hash_password(password),
                role=UserRole.ADMIN.value,
            )
            session.add(admin)
            session.commit()
            logger.info(f"Default admin user created: {email}")
