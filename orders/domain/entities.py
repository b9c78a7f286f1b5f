"""
订单领域模型中的实体。
包含订单聚合及其商品、收货信息、支付记录，以及促销码和促销码使用记录。
"""
from datetime import datetime
from decimal import Decimal
from typing import Any, List, Optional

from core.domain import (
    AggregateRoot,
    Entity,
    Money,
    InvalidEntityStateException,
    ValidationException,
    OrderPlacedEvent,
    OrderStatusChangedEvent,
)
from orders.domain.value_objects import OrderStatus, DiscountType, PricingBreakdown


class OrderItem(Entity):
    """订单商品"""

    def __init__(
        self,
        id: Any = None,
        product_id: Any = None,
        product_name: str = "",
        quantity: int = 1,
        price_at_time: Money = None,
        product_image: str = "",
    ):
        super().__init__(id)
        self.product_id = product_id
        self.product_name = product_name
        self.quantity = quantity
        self.price_at_time = price_at_time or Money.zero()
        self.product_image = product_image

    @property
    def line_total(self) -> Money:
        return self.price_at_time * self.quantity


class OrderShipping(Entity):
    """订单收货信息"""

    def __init__(
        self,
        id: Any = None,
        full_name: str = "",
        email: str = "",
        phone_number: str = "",
        home_address: str = "",
        city: str = "",
        state: str = "",
        zip_code: str = "",
        country: str = "INDONESIA",
        shipping_method: str = "STANDARD",
        shipping_cost: Money = None,
    ):
        super().__init__(id)
        self.full_name = full_name
        self.email = email
        self.phone_number = phone_number
        self.home_address = home_address
        self.city = city
        self.state = state
        self.zip_code = zip_code
        self.country = country
        self.shipping_method = shipping_method
        self.shipping_cost = shipping_cost or Money.zero()


class OrderPayment(Entity):
    """订单支付记录"""

    def __init__(
        self,
        id: Any = None,
        payment_method: str = "",
        payment_provider: str = "",
        transaction_id: str = "",
        payment_card_id: Any = None,
        status: str = "PAID",
        paid_at: Optional[datetime] = None,
    ):
        super().__init__(id)
        self.payment_method = payment_method
        self.payment_provider = payment_provider
        self.transaction_id = transaction_id
        self.payment_card_id = payment_card_id
        self.status = status
        self.paid_at = paid_at


class Order(AggregateRoot):
    """
    订单聚合根。
    金额在下单时确定，之后只有状态会变化。
    """

    def __init__(
        self,
        id: Any = None,
        user_id: Any = None,
        status: str = OrderStatus.PAID,
        subtotal: Money = None,
        discount: Money = None,
        shipping_cost: Money = None,
        tax: Money = None,
        total: Money = None,
        payment: str = "",
        promo_code_id: Any = None,
        items: Optional[List[OrderItem]] = None,
        shipping: Optional[OrderShipping] = None,
        payment_record: Optional[OrderPayment] = None,
        user_email: str = "",
        user_fullname: str = "",
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        """
        初始化订单。

        Args:
            id: 订单ID
            user_id: 下单用户ID
            status: 订单状态
            subtotal: 商品小计
            discount: 优惠金额
            shipping_cost: 运费
            tax: 税费
            total: 订单总额
            payment: 支付方式名称
            promo_code_id: 使用的促销码ID
            items: 订单商品
            shipping: 收货信息
            payment_record: 支付记录
            user_email: 下单用户邮箱，只读
            user_fullname: 下单用户姓名，只读
            created_at: 下单时间
            updated_at: 更新时间
        """
        super().__init__(id)
        self.user_id = user_id
        self.status = status
        self.subtotal = subtotal or Money.zero()
        self.discount = discount or Money.zero()
        self.shipping_cost = shipping_cost or Money.zero()
        self.tax = tax or Money.zero()
        self.total = total or Money.zero()
        self.payment = payment
        self.promo_code_id = promo_code_id
        self.items = items or []
        self.shipping = shipping
        self.payment_record = payment_record
        self.user_email = user_email
        self.user_fullname = user_fullname
        self.created_at = created_at
        self.updated_at = updated_at

    @classmethod
    def place(
        cls,
        user_id: Any,
        items: List[OrderItem],
        pricing: PricingBreakdown,
        payment: str = "",
        promo_code_id: Any = None,
    ) -> 'Order':
        """
        创建一个已支付的新订单。

        Raises:
            ValidationException: 订单没有商品
        """
        if not items:
            raise ValidationException("items", "订单至少包含一件商品")
        order = cls(
            user_id=user_id,
            status=OrderStatus.PAID,
            subtotal=pricing.subtotal,
            discount=pricing.discount,
            shipping_cost=pricing.shipping_cost,
            tax=pricing.tax,
            total=pricing.total,
            payment=payment,
            promo_code_id=promo_code_id,
            items=items,
        )
        order.add_domain_event(OrderPlacedEvent(
            order.id,
            user_id,
            pricing.total.amount,
            [item.product_id for item in items],
        ))
        return order

    def contains_product(self, product_id: Any) -> bool:
        return any(str(item.product_id) == str(product_id) for item in self.items)

    def change_status(self, new_status: str) -> None:
        """
        修改订单状态，后台可设置为任意合法状态。

        Raises:
            ValidationException: 状态不合法
        """
        if not OrderStatus.is_valid(new_status):
            raise ValidationException("status", f"无效的订单状态: {new_status}")
        old_status = self.status
        self.status = new_status
        if old_status != new_status:
            self.add_domain_event(OrderStatusChangedEvent(self.id, old_status, new_status))

    def complete(self) -> None:
        """
        用户确认收货，只有已送达的订单可以完成。

        Raises:
            InvalidEntityStateException: 订单未送达
        """
        if self.status != OrderStatus.DELIVERED:
            raise InvalidEntityStateException("订单", f"当前状态为{self.status}，只有已送达的订单可以确认完成")
        self.change_status(OrderStatus.COMPLETED)

    def is_completed(self) -> bool:
        return self.status == OrderStatus.COMPLETED


class PromoCode(Entity):
    """促销码实体"""

    def __init__(
        self,
        id: Any = None,
        code: str = "",
        description: str = "",
        discount_type: str = DiscountType.PERCENTAGE,
        discount_value: Decimal = Decimal("0"),
        min_order_amount: Decimal = Decimal("0"),
        max_discount: Optional[Decimal] = None,
        usage_limit: Optional[int] = None,
        used_count: int = 0,
        start_at: Optional[datetime] = None,
        expires_at: Optional[datetime] = None,
        is_active: bool = True,
    ):
        super().__init__(id)
        self.code = (code or "").upper()
        self.description = description
        self.discount_type = discount_type
        self.discount_value = Decimal(str(discount_value))
        self.min_order_amount = Decimal(str(min_order_amount or 0))
        self.max_discount = Decimal(str(max_discount)) if max_discount is not None else None
        self.usage_limit = usage_limit
        self.used_count = used_count
        self.start_at = start_at
        self.expires_at = expires_at
        self.is_active = is_active


class PromoRedemption(Entity):
    """促销码使用记录"""

    def __init__(
        self,
        id: Any = None,
        promo_id: Any = None,
        user_id: Any = None,
        order_id: Any = None,
        redeemed_at: Optional[datetime] = None,
    ):
        super().__init__(id)
        self.promo_id = promo_id
        self.user_id = user_id
        self.order_id = order_id
        self.redeemed_at = redeemed_at
