"""用户 API - 注册，以及管理员的列表、角色与删除操作"""
from fastapi import APIRouter, Depends

from qa_forum.api.auth import auth_service, get_admin_user
from qa_forum.api.schemas import (
    DeleteResponse,
    RegisterRequest,
    UpdateRoleRequest,
    UserListResponse,
    UserResponse,
    to_user_response,
)
from qa_forum.models.user_account import UserAccount
from qa_forum.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])

user_service = UserService()


@router.post("", response_model=UserResponse)
def register(payload: RegisterRequest):
    """公开注册，新用户一律为普通用户"""
    user = auth_service.register_user(
        name=payload.name,
        email=payload.email,
        password=payload.password,
    )
    return to_user_response(user)


@router.get("", response_model=UserListResponse)
def list_users(current_user: UserAccount = Depends(get_admin_user)):
    users = user_service.list_users()
    return UserListResponse(items=[to_user_response(user) for user in users], total=len(users))


@router.put("/{user_id}/role", response_model=UserResponse)
def update_user_role(
    user_id: int,
    payload: UpdateRoleRequest,
    current_user: UserAccount = Depends(get_admin_user),
):
    user = user_service.update_role(user_id, payload.role, current_user)
    return to_user_response(user)


@router.delete("/{user_id}", response_model=DeleteResponse)
def delete_user(user_id: int, current_user: UserAccount = Depends(get_admin_user)):
    user_service.delete_user(user_id, current_user)
    return DeleteResponse(deleted=True)
