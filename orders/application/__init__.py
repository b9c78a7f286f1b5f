"""
订单应用层包。
"""

from orders.application.order_service import OrderApplicationService
from orders.application.commands import (
    OrderLineInput,
    PaymentInput,
    ApplyPromoCommand,
    CheckoutQuoteCommand,
    PlaceOrderCommand,
    CompleteOrderCommand,
    SubmitReviewCommand,
    UpdateOrderStatusCommand,
)
from orders.application.queries import GetOrderQuery, ListOrdersQuery
from orders.application.dtos import (
    PromoQuoteDTO,
    CheckoutQuoteDTO,
    OrderDTO,
    OrderListDTO,
    OrderPlacedDTO,
    ReviewDTO,
)

__all__ = [
    'OrderApplicationService',
    'OrderLineInput',
    'PaymentInput',
    'ApplyPromoCommand',
    'CheckoutQuoteCommand',
    'PlaceOrderCommand',
    'CompleteOrderCommand',
    'SubmitReviewCommand',
    'UpdateOrderStatusCommand',
    'GetOrderQuery',
    'ListOrdersQuery',
    'PromoQuoteDTO',
    'CheckoutQuoteDTO',
    'OrderDTO',
    'OrderListDTO',
    'OrderPlacedDTO',
    'ReviewDTO',
]
