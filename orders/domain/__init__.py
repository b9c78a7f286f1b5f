"""
订单领域模型包。
提供订单、促销码相关的实体、值对象、仓储接口和领域服务。
"""

from orders.domain.entities import (
    Order,
    OrderItem,
    OrderShipping,
    OrderPayment,
    PromoCode,
    PromoRedemption,
)
from orders.domain.value_objects import (
    OrderStatus,
    DiscountType,
    PriceLine,
    PricingBreakdown,
    ShippingAddress,
)
from orders.domain.repositories import OrderRepository, PromoCodeRepository
from orders.domain.services import CheckoutPricing, PromoPolicy

__all__ = [
    'Order',
    'OrderItem',
    'OrderShipping',
    'OrderPayment',
    'PromoCode',
    'PromoRedemption',
    'OrderStatus',
    'DiscountType',
    'PriceLine',
    'PricingBreakdown',
    'ShippingAddress',
    'OrderRepository',
    'PromoCodeRepository',
    'CheckoutPricing',
    'PromoPolicy',
]
