"""业务异常

服务层只抛出这些异常，由 main.py 中注册的 handler 统一转换为 HTTP 响应。
"""
from typing import Any, Optional


class ForumError(Exception):
    """所有业务异常的基类"""

    status_code: int = 400
    detail: str = "bad_request"

    def __init__(self, message: Optional[str] = None, detail: Optional[str] = None):
        if detail is not None:
            self.detail = detail
        self.message = message or self.detail
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"detail": self.detail, "message": self.message}


class Unauthenticated(ForumError):
    """缺少、无效或已过期的 token，以及错误的登录凭据"""

    status_code = 401
    detail = "invalid_token"


class PermissionDenied(ForumError):
    status_code = 403
    detail = "permission_denied"

    def __init__(self, action: str, resource: str = "resource", detail: Optional[str] = None):
        self.action = action
        self.resource = resource
        super().__init__(f"You do not have permission to {action} this {resource}", detail=detail)


class NotFound(ForumError):
    status_code = 404
    detail = "not_found"

    def __init__(self, resource: str, resource_id: Any):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(
            f"{resource.capitalize()} not found: {resource_id}",
            detail=f"{resource}_not_found",
        )


class SelfLikeForbidden(ForumError):
    status_code = 400
    detail = "self_like_forbidden"

    def __init__(self, noun: str):
        self.noun = noun
        super().__init__(f"You cannot like your own {noun}.")


class EmailAlreadyExists(ForumError):
    status_code = 409
    detail = "email_exists"
