"""
订单应用服务层的数据传输对象(DTOs)。
金额以两位小数的字符串输出。
"""
from typing import Any, Dict, List, Optional

from core.domain import Money
from orders.domain import Order, OrderItem, PricingBreakdown, PromoCode


def _amount(money: Money) -> str:
    return str(money.quantize().amount)


def _isoformat(value) -> Optional[str]:
    return value.isoformat() if value else None


class PromoQuoteDTO:
    """促销码试算结果"""

    def __init__(self, promo: PromoCode, discount: Money, subtotal: Money):
        self.promo_id = str(promo.id)
        self.code = promo.code
        self.discount = _amount(discount)
        self.final_subtotal = _amount(subtotal - discount)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'promoId': self.promo_id,
            'code': self.code,
            'discount': self.discount,
            'finalSubtotal': self.final_subtotal,
        }


class QuoteLineDTO:
    """报价中的商品行"""

    def __init__(self, product_id: Any, name: str, unit_price: Money, quantity: int):
        self.product_id = str(product_id)
        self.name = name
        self.unit_price = _amount(unit_price)
        self.quantity = quantity
        self.line_total = _amount(unit_price * quantity)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'productId': self.product_id,
            'name': self.name,
            'unitPrice': self.unit_price,
            'quantity': self.quantity,
            'lineTotal': self.line_total,
        }


class CheckoutQuoteDTO:
    """结算报价"""

    def __init__(self, pricing: PricingBreakdown, items: List[QuoteLineDTO], promo_code: Optional[str] = None):
        self.pricing = pricing
        self.items = items
        self.promo_code = promo_code

    def to_dict(self) -> Dict[str, Any]:
        data = self.pricing.to_dict()
        data['promoCode'] = self.promo_code
        data['items'] = [item.to_dict() for item in self.items]
        return data


class OrderItemDTO:
    """订单商品DTO"""

    def __init__(self, item: OrderItem):
        self.id = str(item.id)
        self.product_id = str(item.product_id) if item.product_id else None
        self.quantity = item.quantity
        self.price_at_time = _amount(item.price_at_time)
        self.product = {
            'id': self.product_id,
            'name': item.product_name,
            'image': item.product_image,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'product_id': self.product_id,
            'quantity': self.quantity,
            'price_at_time': self.price_at_time,
            'product': self.product,
        }


class OrderDTO:
    """
    订单DTO。
    用户端列表包含商品和收货信息，详情额外包含支付记录，后台列表额外包含下单用户。
    """

    def __init__(self, order: Order):
        self.order = order
        self.items = [OrderItemDTO(item) for item in order.items]

    @classmethod
    def from_entity(cls, order: Order) -> 'OrderDTO':
        return cls(order)

    def _shipping(self) -> Optional[Dict[str, Any]]:
        shipping = self.order.shipping
        if not shipping:
            return None
        return {
            'full_name': shipping.full_name,
            'email': shipping.email,
            'phone_number': shipping.phone_number,
            'home_address': shipping.home_address,
            'city': shipping.city,
            'state': shipping.state,
            'zip_code': shipping.zip_code,
            'country': shipping.country,
            'shipping_method': shipping.shipping_method,
            'shipping_cost': _amount(shipping.shipping_cost),
        }

    def _payment(self) -> Optional[Dict[str, Any]]:
        payment = self.order.payment_record
        if not payment:
            return None
        return {
            'payment_method': payment.payment_method,
            'payment_provider': payment.payment_provider,
            'transaction_id': payment.transaction_id,
            'payment_card_id': str(payment.payment_card_id) if payment.payment_card_id else None,
            'status': payment.status,
            'paid_at': _isoformat(payment.paid_at),
        }

    def to_dict(self, include_payment: bool = False, include_user: bool = False) -> Dict[str, Any]:
        """
        转换为字典。

        Args:
            include_payment: 是否包含支付记录
            include_user: 是否包含下单用户

        Returns:
            订单字典
        """
        order = self.order
        data = {
            'id': str(order.id),
            'user_id': str(order.user_id),
            'status': order.status,
            'subtotal': _amount(order.subtotal),
            'discount': _amount(order.discount),
            'shipping_cost': _amount(order.shipping_cost),
            'tax': _amount(order.tax),
            'total': _amount(order.total),
            'payment': order.payment,
            'promo_code_id': str(order.promo_code_id) if order.promo_code_id else None,
            'created_at': _isoformat(order.created_at),
            'updated_at': _isoformat(order.updated_at),
            'items': [item.to_dict() for item in self.items],
            'shipping': self._shipping(),
        }
        if include_payment:
            data['payment_detail'] = self._payment()
        if include_user:
            data['user'] = {
                'id': str(order.user_id),
                'email': order.user_email,
                'fullname': order.user_fullname,
            }
        return data


class OrderListDTO:
    """订单分页列表DTO"""

    def __init__(self, items: List[OrderDTO], total: int, page: int, page_size: int):
        self.items = items
        self.total = total
        self.page = page
        self.page_size = page_size


class OrderPlacedDTO:
    """下单结果"""

    def __init__(self, order: Order):
        self.order_id = str(order.id)
        self.total = _amount(order.total)

    def to_dict(self) -> Dict[str, Any]:
        return {'order_id': self.order_id, 'total': self.total}


class ReviewDTO:
    """商品评价DTO"""

    def __init__(self, review):
        self.id = str(review.id)
        self.order_id = str(review.order_id)
        self.product_id = str(review.product_id)
        self.rating = review.rating
        self.review = review.review
        self.created_at = _isoformat(review.created_at)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'order_id': self.order_id,
            'product_id': self.product_id,
            'rating': self.rating,
            'review': self.review,
            'created_at': self.created_at,
        }
