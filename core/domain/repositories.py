"""
仓储基类。
领域层只依赖这些抽象，Django ORM 实现放在各模块的 infrastructure/repositories 下。
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, Tuple, TypeVar

T = TypeVar('T')


class Repository(Generic[T], ABC):
    """按ID读取和保存聚合，保存时不存在则创建"""

    @abstractmethod
    def get_by_id(self, id: Any) -> Optional[T]:
        pass

    @abstractmethod
    def save(self, entity: T) -> T:
        pass


class SearchableRepository(Repository[T], ABC):
    """
    支持后台列表查询的仓储。
    """

    @abstractmethod
    def search(
        self,
        keyword: str,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        page_size: int = 10
    ) -> Tuple[List[T], int]:
        """
        按关键词和过滤条件分页查询。

        Args:
            keyword: 关键词，空字符串表示不过滤
            filters: 各仓储自行约定的过滤字段
            page: 页码，从1开始
            page_size: 每页大小

        Returns:
            (当前页实体列表, 匹配总数)
        """
        pass
