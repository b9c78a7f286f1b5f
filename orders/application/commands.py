"""
订单应用服务层的命令对象。
定义结算、下单、确认收货、评价和后台改状态的命令。
"""
from decimal import Decimal
from typing import Any, List, Optional

from orders.domain import ShippingAddress


class OrderLineInput:
    """下单或报价的商品行"""

    def __init__(self, product_id: Any, quantity: int):
        self.product_id = product_id
        self.quantity = quantity


class PaymentInput:
    """
    支付信息。
    同时提供卡号和持卡人时会关联或保存支付卡。
    """

    def __init__(
        self,
        method: str,
        provider: str = "",
        transaction_id: str = "",
        card_number: Optional[str] = None,
        card_name: Optional[str] = None,
        expiry_month: Optional[int] = None,
        expiry_year: Optional[int] = None,
    ):
        self.method = method
        self.provider = provider or ""
        self.transaction_id = transaction_id or ""
        self.card_number = card_number
        self.card_name = card_name
        self.expiry_month = expiry_month
        self.expiry_year = expiry_year


class ApplyPromoCommand:
    """使用促销码命令"""

    def __init__(self, user_id: Any, code: str, subtotal: Decimal):
        """
        初始化使用促销码命令。

        Args:
            user_id: 用户ID
            code: 促销码
            subtotal: 商品小计
        """
        self.user_id = user_id
        self.code = code
        self.subtotal = subtotal


class CheckoutQuoteCommand:
    """结算报价命令"""

    def __init__(self, user_id: Any, items: List[OrderLineInput], promo_code: Optional[str] = None):
        self.user_id = user_id
        self.items = items
        self.promo_code = promo_code or None


class PlaceOrderCommand:
    """下单命令"""

    def __init__(
        self,
        user_id: Any,
        items: List[OrderLineInput],
        shipping: ShippingAddress,
        payment: PaymentInput,
        promo_code: Optional[str] = None,
    ):
        """
        初始化下单命令。

        Args:
            user_id: 用户ID
            items: 商品行
            shipping: 收货地址
            payment: 支付信息
            promo_code: 促销码
        """
        self.user_id = user_id
        self.items = items
        self.shipping = shipping
        self.payment = payment
        self.promo_code = promo_code or None


class CompleteOrderCommand:
    """确认收货命令"""

    def __init__(self, user_id: Any, order_id: Any):
        self.user_id = user_id
        self.order_id = order_id


class SubmitReviewCommand:
    """评价商品命令"""

    def __init__(self, user_id: Any, order_id: Any, product_id: Any, rating: int, review: str = ""):
        self.user_id = user_id
        self.order_id = order_id
        self.product_id = product_id
        self.rating = rating
        self.review = review or ""


class UpdateOrderStatusCommand:
    def __init__(self, order_id: Any, status: str):
        self.order_id = order_id
        self.status = status
