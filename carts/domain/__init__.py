"""
购物车领域模型包。
提供购物车和收藏的实体与仓储接口。
"""

from carts.domain.entities import Cart, CartItem, Favorite
from carts.domain.repositories import CartRepository, FavoriteRepository

__all__ = [
    'Cart',
    'CartItem',
    'Favorite',
    'CartRepository',
    'FavoriteRepository',
]
