"""
订单领域模型中的值对象。
包含订单状态、折扣类型、价格明细和收货地址。
"""
from typing import Any, Dict

from core.domain import ValueObject, Money


class OrderStatus:
    """订单状态枚举"""
    PAID = "paid"              # 已支付，新订单的初始状态
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    COMPLETED = "completed"    # 用户确认收货
    CANCELLED = "cancelled"

    ALL = (PAID, PENDING, PROCESSING, SHIPPED, DELIVERED, COMPLETED, CANCELLED)

    @classmethod
    def is_valid(cls, status: str) -> bool:
        return status in cls.ALL


class DiscountType:
    """促销码折扣类型"""
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class PriceLine(ValueObject):
    """计价行：商品单价和数量"""

    def __init__(self, product_id: Any, unit_price: Money, quantity: int):
        self.product_id = product_id
        self.unit_price = unit_price
        self.quantity = quantity

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity


class PricingBreakdown(ValueObject):
    """
    结算价格明细。
    所有金额都已按分四舍五入。
    """

    def __init__(self, subtotal: Money, discount: Money, shipping_cost: Money, tax: Money, total: Money):
        self.subtotal = subtotal
        self.discount = discount
        self.shipping_cost = shipping_cost
        self.tax = tax
        self.total = total

    def to_dict(self) -> Dict[str, str]:
        return {
            'subtotal': str(self.subtotal.amount),
            'discount': str(self.discount.amount),
            'shippingCost': str(self.shipping_cost.amount),
            'tax': str(self.tax.amount),
            'total': str(self.total.amount),
        }


class ShippingAddress(ValueObject):
    """收货地址"""

    def __init__(
        self,
        full_name: str,
        email: str,
        address: str,
        city: str,
        state: str,
        zip_code: str,
        phone: str = "",
        country: str = "",
    ):
        self.full_name = full_name
        self.email = email
        self.phone = phone or ""
        self.address = address
        self.city = city
        self.state = state
        self.zip_code = zip_code
        self.country = country
