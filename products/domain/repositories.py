"""
商品领域模型中的仓储接口。
定义用于持久化和检索分类、商品、评价和库存变动的仓储接口。
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from core.domain.repositories import SearchableRepository
from products.domain.entities import Category, Product, ProductReview, StockMovement


class ProductRepository(SearchableRepository[Product]):
    """
    商品仓储接口。
    """

    @abstractmethod
    def save(self, product: Product) -> Product:
        """
        保存商品，不存在时创建。

        Args:
            product: 商品

        Returns:
            保存后的商品
        """
        pass

    @abstractmethod
    def delete(self, product: Product) -> None:
        pass

    @abstractmethod
    def search(
        self,
        keyword: str,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        page_size: int = 10
    ) -> Tuple[List[Product], int]:
        """
        搜索商品。

        Args:
            keyword: 名称关键词，不区分大小写
            filters: 过滤条件，支持 status 和 category（分类标识）
            page: 页码
            page_size: 每页大小

        Returns:
            商品列表和总数的元组
        """
        pass

    @abstractmethod
    def get_by_ids(self, ids: List[Any], for_update: bool = False) -> Dict[str, Product]:
        """
        批量获取商品。

        Args:
            ids: 商品ID列表
            for_update: 是否加行锁，需要在事务中调用

        Returns:
            以商品ID字符串为键的字典，不存在的ID不会出现在结果中
        """
        pass

    @abstractmethod
    def list_by_category(self, category_id: Any) -> List[Product]:
        pass

    @abstractmethod
    def delete_many(self, ids: List[Any]) -> int:
        """批量删除商品，返回删除数量"""
        pass

    @abstractmethod
    def update_rating(self, product_id: Any, rating: Any) -> None:
        pass


class CategoryRepository(ABC):
    """
    分类仓储接口。
    """

    @abstractmethod
    def get_by_id(self, id: Any) -> Optional[Category]:
        pass

    @abstractmethod
    def get_by_slug(self, slug: str) -> Optional[Category]:
        pass

    @abstractmethod
    def list_all(self) -> List[Category]:
        """按名称排序的全部分类，带商品数量"""
        pass


class ProductReviewRepository(ABC):
    """
    商品评价仓储接口。
    """

    @abstractmethod
    def exists(self, user_id: Any, order_id: Any, product_id: Any) -> bool:
        pass

    @abstractmethod
    def add(self, review: ProductReview) -> ProductReview:
        pass

    @abstractmethod
    def ratings_for_product(self, product_id: Any) -> List[int]:
        pass


class StockMovementRepository(ABC):
    """
    库存变动仓储接口。
    """

    @abstractmethod
    def add(self, movement: StockMovement) -> StockMovement:
        pass
