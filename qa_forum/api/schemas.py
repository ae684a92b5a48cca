from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, EmailStr, Field

from qa_forum.models.user_account import UserAccount


# ========== Auth & User Schemas ==========

class RegisterRequest(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=8)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class LoginResponse(BaseModel):
    message: str = "Login successful"
    token: str


class LogoutResponse(BaseModel):
    message: str = "Logout successful"


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    role: str  # "admin" or "user"
    created_at: datetime
    updated_at: datetime


class UserListResponse(BaseModel):
    items: List[UserResponse]
    total: int = 0


class UpdateRoleRequest(BaseModel):
    role: Literal["user", "admin"]


class DeleteResponse(BaseModel):
    deleted: bool


# ========== Question Schemas ==========

class CreateQuestionRequest(BaseModel):
    title: str = Field(min_length=1)
    content: str = Field(min_length=1)


class UpdateQuestionRequest(BaseModel):
    id: int
    title: Optional[str] = None
    content: Optional[str] = None


# ========== Answer Schemas ==========

class CreateAnswerRequest(BaseModel):
    question_id: int
    content: str = Field(min_length=1)


class UpdateAnswerRequest(BaseModel):
    content: Optional[str] = None


# ========== Like Schemas ==========

class LikeToggleResponse(BaseModel):
    message: str
    liked: bool


def to_user_response(user: UserAccount) -> UserResponse:
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )

