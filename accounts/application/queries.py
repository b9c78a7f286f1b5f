"""
账户应用服务层的查询对象。
"""
from typing import Optional


class ListUsersQuery:
    """后台用户列表查询"""

    def __init__(
        self,
        page: int = 1,
        page_size: int = 10,
        search: str = "",
        role: Optional[str] = None,
    ):
        """
        初始化用户列表查询。

        Args:
            page: 页码
            page_size: 每页大小，最大50
            search: 邮箱关键词
            role: 角色过滤
        """
        self.page = max(1, page)
        self.page_size = min(50, max(1, page_size))
        self.search = search or ""
        self.role = role or None
