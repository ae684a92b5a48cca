from typing import Optional

from fastapi import APIRouter, Depends, Header, Response

from qa_forum.api.schemas import (
    LoginRequest,
    LoginResponse,
    LogoutResponse,
    UserResponse,
    to_user_response,
)
from qa_forum.models.user_account import UserAccount, UserRole
from qa_forum.services.auth_service import AuthService
from qa_forum.services.errors import PermissionDenied, Unauthenticated

router = APIRouter(prefix="/auth", tags=["auth"])

auth_service = AuthService()


def _parse_bearer(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise Unauthenticated("Invalid authorization header")
    return token.strip()


def get_token(authorization: Optional[str] = Header(None, alias="Authorization")) -> str:
    token = _parse_bearer(authorization)
    if token is None:
        raise Unauthenticated("Token is missing", detail="missing_token")
    return token


def get_current_user(token: str = Depends(get_token)) -> UserAccount:
    """获取当前登录用户（依赖注入）"""
    return auth_service.validate_token(token)


def get_optional_user(
    authorization: Optional[str] = Header(None, alias="Authorization"),
) -> Optional[UserAccount]:
    """读接口使用：无 token 视为匿名，携带无效 token 仍返回 401"""
    token = _parse_bearer(authorization)
    if token is None:
        return None
    return auth_service.validate_token(token)


def get_admin_user(current_user: UserAccount = Depends(get_current_user)) -> UserAccount:
    """获取管理员用户（依赖注入）

    检查当前用户是否为管理员，如果不是则抛出 403 错误
    """
    if current_user.role != UserRole.ADMIN:
        raise PermissionDenied("access", "resource", detail="admin_required")
    return current_user


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, response: Response):
    token = auth_service.login(email=payload.email, password=payload.password)
    response.headers["Authorization"] = f"Bearer {token}"
    return LoginResponse(token=token)


@router.post("/logout", response_model=LogoutResponse)
def logout(authorization: Optional[str] = Header(None, alias="Authorization")):
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() == "bearer" and token.strip():
        auth_service.logout(token.strip())
    return LogoutResponse()


@router.get("/validate", response_model=UserResponse)
def validate(current_user: UserAccount = Depends(get_current_user)):
    return to_user_response(current_user)
