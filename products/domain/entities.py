"""
商品领域模型中的实体。
包含分类、商品、商品评价和库存变动实体。
"""
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional

from core.domain import (
    AggregateRoot,
    Entity,
    Money,
    InsufficientStockException,
    ProductStockChangedEvent,
    ValidationException,
)


class ProductStatus:
    """商品状态枚举"""
    ACTIVE = "active"      # 上架，可购买
    INACTIVE = "inactive"  # 下架，不可购买

    ALL = (ACTIVE, INACTIVE)


class StockReason:
    """库存变动原因"""
    INITIAL = "initial"
    ADJUSTMENT = "adjustment"
    ORDER = "order"


class Category(Entity):
    """
    商品分类实体。
    """

    def __init__(
        self,
        id: Any = None,
        name: str = "",
        slug: str = "",
        description: str = "",
        image: str = "",
        icon: str = "",
        product_count: int = 0,
    ):
        super().__init__(id)
        self.name = name
        self.slug = slug
        self.description = description
        self.image = image
        self.icon = icon
        # 由仓储在查询时填充
        self.product_count = product_count


class Product(AggregateRoot):
    """
    商品聚合根。
    库存只能通过 adjust_stock 和 sell 修改，每次修改都会产生库存变更事件。
    """

    def __init__(
        self,
        id: Any = None,
        name: str = "",
        description: str = "",
        price: Money = None,
        discount: Decimal = Decimal("0"),
        image: str = "",
        rating: Decimal = Decimal("0"),
        sales: int = 0,
        specification: Optional[Dict[str, Any]] = None,
        status: str = ProductStatus.ACTIVE,
        stock: int = 0,
        badge: str = "",
        category_id: Any = None,
        category_name: Optional[str] = None,
        category_slug: Optional[str] = None,
        date_added: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        """
        初始化商品。

        Args:
            id: 商品ID，如果未提供则自动生成
            name: 商品名称
            description: 商品描述
            price: 商品价格
            discount: 折扣百分比，只用于展示
            image: 商品图片
            rating: 平均评分
            sales: 累计销量
            specification: 规格
            status: 状态
            stock: 库存
            badge: 角标
            category_id: 分类ID
            category_name: 分类名称
            category_slug: 分类标识
            date_added: 上架时间
            updated_at: 更新时间
        """
        super().__init__(id)
        self.name = name
        self.description = description
        self.price = price or Money.zero()
        self.discount = Decimal(str(discount or 0))
        self.image = image
        self.rating = Decimal(str(rating or 0))
        self.sales = sales
        self.specification = specification or {}
        self.status = status
        self.stock = stock
        self.badge = badge
        self.category_id = category_id
        self.category_name = category_name
        self.category_slug = category_slug
        self.date_added = date_added
        self.updated_at = updated_at

    def is_available(self) -> bool:
        """商品是否可购买"""
        return self.status == ProductStatus.ACTIVE

    def update_details(
        self,
        name: str,
        price: Money,
        description: Optional[str] = None,
        image: Optional[str] = None,
        status: Optional[str] = None,
        discount: Optional[Decimal] = None,
        badge: Optional[str] = None,
        specification: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        更新商品基本信息，None 表示不修改。

        Raises:
            ValidationException: 价格为负数或状态无效
        """
        if price.amount < 0:
            raise ValidationException("price", "价格不能为负数")
        if status is not None and status not in ProductStatus.ALL:
            raise ValidationException("status", f"无效的商品状态: {status}")

        self.name = name
        self.price = price
        if description is not None:
            self.description = description
        if image is not None:
            self.image = image
        if status is not None:
            self.status = status
        if discount is not None:
            self.discount = Decimal(str(discount))
        if badge is not None:
            self.badge = badge
        if specification is not None:
            self.specification = specification

    def adjust_stock(self, new_stock: int, reason: str = StockReason.ADJUSTMENT) -> int:
        """
        把库存设置为指定值。

        Args:
            new_stock: 新库存
            reason: 变动原因

        Returns:
            库存变化量

        Raises:
            ValidationException: 库存为负数
        """
        if new_stock < 0:
            raise ValidationException("stock", "库存不能为负数")
        old_stock = self.stock
        self.stock = new_stock
        if new_stock != old_stock:
            self.add_domain_event(ProductStockChangedEvent(self.id, old_stock, new_stock, reason))
        return new_stock - old_stock

    def ensure_stock(self, quantity: int) -> None:
        """
        检查库存是否足够。

        Raises:
            InsufficientStockException: 库存不足
        """
        if quantity > self.stock:
            raise InsufficientStockException(self.id, quantity, self.stock)

    def sell(self, quantity: int) -> None:
        """
        下单扣减库存并累加销量。

        Args:
            quantity: 购买数量

        Raises:
            InsufficientStockException: 库存不足
        """
        self.ensure_stock(quantity)
        old_stock = self.stock
        self.stock -= quantity
        self.sales += quantity
        self.add_domain_event(ProductStockChangedEvent(self.id, old_stock, self.stock, StockReason.ORDER))


class ProductReview(Entity):
    """商品评价实体"""

    def __init__(
        self,
        id: Any = None,
        user_id: Any = None,
        order_id: Any = None,
        product_id: Any = None,
        rating: int = 5,
        review: str = "",
        created_at: Optional[datetime] = None,
    ):
        super().__init__(id)
        self.user_id = user_id
        self.order_id = order_id
        self.product_id = product_id
        self.rating = rating
        self.review = review
        self.created_at = created_at


class StockMovement(Entity):
    """库存变动记录"""

    def __init__(
        self,
        id: Any = None,
        product_id: Any = None,
        quantity_change: int = 0,
        reason: str = StockReason.ADJUSTMENT,
        order_id: Any = None,
        created_at: Optional[datetime] = None,
    ):
        super().__init__(id)
        self.product_id = product_id
        self.quantity_change = quantity_change
        self.reason = reason
        self.order_id = order_id
        self.created_at = created_at
