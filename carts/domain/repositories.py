"""
购物车仓储接口。
"""
from abc import ABC, abstractmethod
from typing import Any, List, Optional

from carts.domain.entities import Cart, Favorite


class CartRepository(ABC):
    """购物车仓储接口"""

    @abstractmethod
    def get_for_user(self, user_id: Any) -> Optional[Cart]:
        """
        获取用户的购物车及其全部商品。

        Args:
            user_id: 用户ID

        Returns:
            购物车，用户还没有购物车时返回None
        """
        pass

    @abstractmethod
    def get_or_create_for_user(self, user_id: Any) -> Cart:
        pass

    @abstractmethod
    def save(self, cart: Cart) -> Cart:
        """
        保存购物车。
        新增或更新聚合内的商品行，删除已经不在聚合内的商品行。
        """
        pass


class FavoriteRepository(ABC):
    """收藏仓储接口"""

    @abstractmethod
    def exists(self, user_id: Any, product_id: Any) -> bool:
        pass

    @abstractmethod
    def add(self, favorite: Favorite) -> Favorite:
        pass

    @abstractmethod
    def list_for_user(self, user_id: Any) -> List[Favorite]:
        """按收藏时间倒序返回用户的收藏，附带商品"""
        pass

    @abstractmethod
    def remove(self, user_id: Any, product_id: Any) -> int:
        """删除收藏，返回删除的条数"""
        pass
