"""所有权校验

问题和回答的更新、删除共用同一条规则：作者本人或管理员。
这里只做判断，不访问数据库。
"""
from qa_forum.models.user_account import UserAccount, UserRole
from qa_forum.services.errors import PermissionDenied


def is_owner_or_admin(resource_author_id: int, acting_user: UserAccount) -> bool:
    return acting_user.id == resource_author_id or acting_user.role == UserRole.ADMIN


def check_owner_or_admin(
    resource_author_id: int,
    acting_user: UserAccount,
    action: str,
    resource: str = "resource",
) -> None:
    """校验 acting_user 是否可以对资源执行 action

    Args:
        resource_author_id: 资源作者 ID
        acting_user: 当前用户
        action: 操作名称，如 "update"、"delete"
        resource: 资源名称，用于错误信息

    Raises:
        PermissionDenied: 既不是作者也不是管理员
    """
    if not is_owner_or_admin(resource_author_id, acting_user):
        raise PermissionDenied(action, resource)


def check_admin(acting_user: UserAccount, action: str, resource: str = "resource") -> None:
    if acting_user.role != UserRole.ADMIN:
        raise PermissionDenied(action, resource)
