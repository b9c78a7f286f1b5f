"""
商品应用服务层的查询对象。
定义用于查询商品目录的查询。
"""
from typing import Any, Optional

from products.domain.config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE


class GetProductQuery:
    """获取单个商品的查询"""

    def __init__(self, id: Any):
        """
        初始化获取商品查询。

        Args:
            id: 商品ID
        """
        self.id = id


class SearchProductsQuery:
    """搜索商品的查询"""

    def __init__(
        self,
        keyword: str = "",
        status: Optional[str] = None,
        category: Optional[str] = None,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE
    ):
        """
        初始化搜索商品查询。

        Args:
            keyword: 名称关键词
            status: 状态过滤
            category: 分类标识过滤
            page: 页码
            page_size: 每页大小
        """
        self.keyword = keyword or ""
        self.status = status or None
        self.category = category or None
        self.page = max(1, page)  # 确保页码至少为1
        self.page_size = min(MAX_PAGE_SIZE, max(1, page_size))  # 限制页大小范围


class GetCategoryQuery:
    """按标识获取分类及其商品的查询"""

    def __init__(self, slug: str):
        self.slug = slug
