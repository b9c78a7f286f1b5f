"""
购物车应用层包。
"""

from carts.application.cart_service import CartApplicationService
from carts.application.commands import (
    AddToCartCommand,
    UpdateCartItemCommand,
    RemoveCartItemCommand,
    AddFavoriteCommand,
    RemoveFavoriteCommand,
)
from carts.application.dtos import CartItemDTO, CartDTO, FavoriteDTO, FavoriteListDTO

__all__ = [
    'CartApplicationService',
    'AddToCartCommand',
    'UpdateCartItemCommand',
    'RemoveCartItemCommand',
    'AddFavoriteCommand',
    'RemoveFavoriteCommand',
    'CartItemDTO',
    'CartDTO',
    'FavoriteDTO',
    'FavoriteListDTO',
]
