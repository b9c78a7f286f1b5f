"""
DRF权限类。
后台接口要求登录用户的角色为管理员。
"""
from rest_framework.permissions import BasePermission


ADMIN_ROLE = "admin"


class IsAdminRole(BasePermission):
    """仅允许 role == admin 的已登录用户访问"""

    message = "仅限管理员访问"

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and getattr(user, 'role', None) == ADMIN_ROLE)
