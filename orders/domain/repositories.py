"""
订单仓储接口。
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from core.domain import SearchableRepository
from orders.domain.entities import Order, PromoCode, PromoRedemption


class OrderRepository(SearchableRepository[Order]):
    """
    订单仓储接口。
    读取的订单包含商品、收货信息和支付记录。
    """

    @abstractmethod
    def save(self, order: Order) -> Order:
        """
        保存订单。
        新订单同时写入订单商品、收货信息和支付记录，已有订单只更新订单本身。
        """
        pass

    @abstractmethod
    def get_for_user(self, order_id: Any, user_id: Any) -> Optional[Order]:
        """获取属于指定用户的订单，不属于该用户时返回None"""
        pass

    @abstractmethod
    def list_for_user(self, user_id: Any) -> List[Order]:
        """按下单时间倒序返回用户的全部订单"""
        pass

    @abstractmethod
    def search(
        self,
        keyword: str,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        page_size: int = 10
    ) -> Tuple[List[Order], int]:
        """
        后台搜索订单。

        Args:
            keyword: UUID时按订单ID匹配，否则按用户邮箱或姓名模糊匹配
            filters: 过滤条件，支持 status
            page: 页码
            page_size: 每页大小

        Returns:
            订单列表和总数的元组
        """
        pass


class PromoCodeRepository(ABC):
    """促销码仓储接口"""

    @abstractmethod
    def get_active_by_code(self, code: str) -> Optional[PromoCode]:
        """按促销码查找启用中的促销码，不区分大小写"""
        pass

    @abstractmethod
    def has_redeemed(self, promo_id: Any, user_id: Any) -> bool:
        pass

    @abstractmethod
    def add_redemption(self, redemption: PromoRedemption) -> PromoRedemption:
        pass

    @abstractmethod
    def increment_used_count(self, promo_id: Any) -> None:
        pass
