"""
订单应用服务层的查询对象。
"""
from typing import Any, Optional


class GetOrderQuery:
    """获取当前用户订单的查询"""

    def __init__(self, user_id: Any, order_id: Any):
        self.user_id = user_id
        self.order_id = order_id


class ListOrdersQuery:
    """后台订单列表查询"""

    def __init__(
        self,
        page: int = 1,
        page_size: int = 10,
        status: Optional[str] = None,
        search: str = "",
    ):
        """
        初始化订单列表查询。

        Args:
            page: 页码
            page_size: 每页大小，最大50
            status: 状态过滤
            search: 订单ID，或用户邮箱、姓名关键词
        """
        self.page = max(1, page)
        self.page_size = min(50, max(1, page_size))
        self.status = status or None
        self.search = search or ""
