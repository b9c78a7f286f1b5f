"""
购物车领域模型中的实体。
包含购物车聚合、购物车商品和收藏实体。
"""
from datetime import datetime
from typing import Any, List, Optional

from core.domain import (
    AggregateRoot,
    Entity,
    Money,
    BusinessRuleViolationException,
    EntityNotFoundException,
    ValidationException,
)
from products.domain import Product


class CartItem(Entity):
    """
    购物车商品。
    price_at_time 记录加入购物车时的商品价格。
    """

    def __init__(
        self,
        id: Any = None,
        product_id: Any = None,
        quantity: int = 1,
        price_at_time: Money = None,
        product: Optional[Product] = None,
        created_at: Optional[datetime] = None,
    ):
        super().__init__(id)
        self.product_id = product_id
        self.quantity = quantity
        self.price_at_time = price_at_time or Money.zero()
        # 仓储读取时附带的商品快照
        self.product = product
        self.created_at = created_at


class Cart(AggregateRoot):
    """
    购物车聚合根。
    每个用户只有一个购物车，同一商品在购物车中只占一行。
    """

    def __init__(self, id: Any = None, user_id: Any = None, items: Optional[List[CartItem]] = None):
        super().__init__(id)
        self.user_id = user_id
        self.items = items or []

    @property
    def count(self) -> int:
        """购物车中的商品行数"""
        return len(self.items)

    def find_item(self, item_id: Any) -> Optional[CartItem]:
        for item in self.items:
            if str(item.id) == str(item_id):
                return item
        return None

    def find_by_product(self, product_id: Any) -> Optional[CartItem]:
        for item in self.items:
            if str(item.product_id) == str(product_id):
                return item
        return None

    def add_product(self, product: Product, quantity: int = 1) -> CartItem:
        """
        加入商品，已存在时累加数量。

        Args:
            product: 商品
            quantity: 加入数量

        Returns:
            新增或更新后的购物车商品

        Raises:
            ValidationException: 数量小于1
            BusinessRuleViolationException: 商品已下架
            InsufficientStockException: 累加后的数量超过库存
        """
        if quantity < 1:
            raise ValidationException("quantity", "数量至少为1")
        if not product.is_available():
            raise BusinessRuleViolationException("product_unavailable", "商品已下架，无法加入购物车")

        item = self.find_by_product(product.id)
        new_quantity = quantity + (item.quantity if item else 0)
        product.ensure_stock(new_quantity)

        if item:
            item.quantity = new_quantity
            item.product = product
            return item

        item = CartItem(
            product_id=product.id,
            quantity=quantity,
            price_at_time=product.price,
            product=product,
        )
        self.items.append(item)
        return item

    def update_quantity(self, item_id: Any, quantity: int) -> CartItem:
        """
        修改购物车商品数量。

        Raises:
            ValidationException: 数量小于1
            EntityNotFoundException: 购物车中没有该商品
        """
        if quantity < 1:
            raise ValidationException("quantity", "数量至少为1")
        item = self.find_item(item_id)
        if not item:
            raise EntityNotFoundException("购物车商品", item_id)
        if item.product:
            item.product.ensure_stock(quantity)
        item.quantity = quantity
        return item

    def remove_item(self, item_id: Any) -> int:
        """移除一行商品，返回移除的行数"""
        item = self.find_item(item_id)
        if not item:
            return 0
        self.items.remove(item)
        return 1

    def remove_products(self, product_ids: List[Any]) -> int:
        """移除指定商品的所有行，返回移除的行数"""
        wanted = {str(product_id) for product_id in product_ids}
        kept = [item for item in self.items if str(item.product_id) not in wanted]
        removed = len(self.items) - len(kept)
        self.items = kept
        return removed


class Favorite(Entity):
    """收藏实体"""

    def __init__(
        self,
        id: Any = None,
        user_id: Any = None,
        product_id: Any = None,
        product: Optional[Product] = None,
        created_at: Optional[datetime] = None,
    ):
        super().__init__(id)
        self.user_id = user_id
        self.product_id = product_id
        self.product = product
        self.created_at = created_at
