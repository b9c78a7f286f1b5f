from orders.infrastructure.models.order_models import (
    PromoCode,
    Order,
    OrderItem,
    OrderShipping,
    OrderPayment,
    PromoRedemption,
)

__all__ = ['PromoCode', 'Order', 'OrderItem', 'OrderShipping', 'OrderPayment', 'PromoRedemption']
