"""
购物车应用服务层的数据传输对象(DTOs)。
"""
from typing import Any, Dict, List

from carts.domain import Cart, CartItem, Favorite
from products.domain import Product


def _product_summary(product: Product) -> Dict[str, Any]:
    return {
        'id': str(product.id),
        'name': product.name,
        'image': product.image,
        'price': str(product.price.quantize().amount),
        'stock': product.stock,
        'discount': float(product.discount),
    }


class CartItemDTO:
    """购物车商品DTO"""

    def __init__(self, item: CartItem):
        self.id = str(item.id)
        self.product_id = str(item.product_id)
        self.quantity = item.quantity
        self.price_at_time = str(item.price_at_time.quantize().amount)
        self.product = _product_summary(item.product) if item.product else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'product_id': self.product_id,
            'quantity': self.quantity,
            'price_at_time': self.price_at_time,
            'product': self.product,
        }


class CartDTO:
    """购物车DTO，count 为商品行数"""

    def __init__(self, items: List[CartItemDTO]):
        self.items = items
        self.count = len(items)

    @classmethod
    def from_entity(cls, cart: Cart) -> 'CartDTO':
        return cls([CartItemDTO(item) for item in cart.items])

    @classmethod
    def empty(cls) -> 'CartDTO':
        return cls([])

    def to_dict(self) -> Dict[str, Any]:
        return {
            'items': [item.to_dict() for item in self.items],
            'count': self.count,
        }


class FavoriteDTO:
    """收藏DTO"""

    def __init__(self, favorite: Favorite):
        self.id = str(favorite.id)
        self.product_id = str(favorite.product_id)
        self.created_at = favorite.created_at.isoformat() if favorite.created_at else None
        self.product = _product_summary(favorite.product) if favorite.product else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'product_id': self.product_id,
            'created_at': self.created_at,
            'product': self.product,
        }


class FavoriteListDTO:
    """收藏列表DTO"""

    def __init__(self, items: List[FavoriteDTO]):
        self.items = items
        self.count = len(items)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'items': [item.to_dict() for item in self.items],
            'count': self.count,
        }
