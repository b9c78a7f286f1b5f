"""
订单仓储的Django实现。
"""
import uuid
from typing import Any, Dict, List, Optional, Tuple

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Q

from core.domain.value_objects import Money
from orders.domain.entities import Order, OrderItem, OrderShipping, OrderPayment
from orders.domain.repositories import OrderRepository
from orders.infrastructure.models.order_models import (
    Order as OrderModel,
    OrderItem as OrderItemModel,
    OrderShipping as OrderShippingModel,
    OrderPayment as OrderPaymentModel,
)


def _parse_uuid(value: str) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(str(value).strip())
    except (TypeError, ValueError):
        return None


class DjangoOrderRepository(OrderRepository):
    """
    基于Django ORM的订单仓储实现。
    保存成功后发布订单上待发布的领域事件。
    """

    def __init__(self, currency: str = "USD"):
        self.currency = currency

    def _queryset(self):
        return (
            OrderModel.objects
            .select_related('user', 'shipping', 'payment_record')
            .prefetch_related('items__product')
        )

    def _money(self, amount) -> Money:
        return Money(amount, self.currency)

    def get_by_id(self, id: Any) -> Optional[Order]:
        try:
            return self._to_domain_entity(self._queryset().get(id=id))
        except (OrderModel.DoesNotExist, ValidationError, ValueError, TypeError):
            return None

    def get_for_user(self, order_id: Any, user_id: Any) -> Optional[Order]:
        try:
            return self._to_domain_entity(self._queryset().get(id=order_id, user_id=user_id))
        except (OrderModel.DoesNotExist, ValidationError, ValueError, TypeError):
            return None

    def list_for_user(self, user_id: Any) -> List[Order]:
        models = self._queryset().filter(user_id=user_id).order_by('-created_at')
        return [self._to_domain_entity(model) for model in models]

    def search(
        self,
        keyword: str,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        page_size: int = 10
    ) -> Tuple[List[Order], int]:
        queryset = self._queryset()

        keyword = (keyword or "").strip()
        if keyword:
            order_id = _parse_uuid(keyword)
            if order_id:
                queryset = queryset.filter(id=order_id)
            else:
                queryset = queryset.filter(
                    Q(user__email__icontains=keyword) | Q(user__fullname__icontains=keyword)
                )

        filters = filters or {}
        if filters.get('status'):
            queryset = queryset.filter(status=filters['status'])

        total = queryset.count()
        offset = (page - 1) * page_size
        models = queryset.order_by('-created_at')[offset:offset + page_size]
        return [self._to_domain_entity(model) for model in models], total

    def save(self, order: Order) -> Order:
        """
        保存订单。

        Args:
            order: 订单聚合

        Returns:
            保存后的订单
        """
        with transaction.atomic():
            model, created = OrderModel.objects.update_or_create(
                id=order.id,
                defaults={
                    'user_id': order.user_id,
                    'status': order.status,
                    'subtotal': order.subtotal.amount,
                    'discount': order.discount.amount,
                    'shipping_cost': order.shipping_cost.amount,
                    'tax': order.tax.amount,
                    'total': order.total.amount,
                    'payment': order.payment,
                    'promo_code_id': order.promo_code_id,
                }
            )

            if created:
                OrderItemModel.objects.bulk_create([
                    OrderItemModel(
                        id=item.id,
                        order=model,
                        product_id=item.product_id,
                        product_name=item.product_name,
                        quantity=item.quantity,
                        price_at_time=item.price_at_time.amount,
                    )
                    for item in order.items
                ])

            if order.shipping:
                self._save_shipping(model, order.shipping)
            if order.payment_record:
                self._save_payment(model, order.payment_record)

            order.created_at = model.created_at
            order.updated_at = model.updated_at

            order.publish_domain_events()
            return order

    def _save_shipping(self, model: OrderModel, shipping: OrderShipping) -> None:
        OrderShippingModel.objects.update_or_create(
            order=model,
            defaults={
                'full_name': shipping.full_name,
                'email': shipping.email,
                'phone_number': shipping.phone_number,
                'home_address': shipping.home_address,
                'city': shipping.city,
                'state': shipping.state,
                'zip_code': shipping.zip_code,
                'country': shipping.country,
                'shipping_method': shipping.shipping_method,
                'shipping_cost': shipping.shipping_cost.amount,
            }
        )

    def _save_payment(self, model: OrderModel, payment: OrderPayment) -> None:
        OrderPaymentModel.objects.update_or_create(
            order=model,
            defaults={
                'payment_method': payment.payment_method,
                'payment_provider': payment.payment_provider,
                'transaction_id': payment.transaction_id,
                'payment_card_id': payment.payment_card_id,
                'status': payment.status,
                'paid_at': payment.paid_at,
            }
        )

    def _to_domain_entity(self, model: OrderModel) -> Order:
        items = [
            OrderItem(
                id=item.id,
                product_id=item.product_id,
                product_name=item.product.name if item.product else item.product_name,
                quantity=item.quantity,
                price_at_time=self._money(item.price_at_time),
                product_image=item.product.image if item.product else "",
            )
            for item in model.items.all()
        ]

        shipping = None
        shipping_model = getattr(model, 'shipping', None)
        if shipping_model:
            shipping = OrderShipping(
                id=shipping_model.id,
                full_name=shipping_model.full_name,
                email=shipping_model.email,
                phone_number=shipping_model.phone_number,
                home_address=shipping_model.home_address,
                city=shipping_model.city,
                state=shipping_model.state,
                zip_code=shipping_model.zip_code,
                country=shipping_model.country,
                shipping_method=shipping_model.shipping_method,
                shipping_cost=self._money(shipping_model.shipping_cost),
            )

        payment_record = None
        payment_model = getattr(model, 'payment_record', None)
        if payment_model:
            payment_record = OrderPayment(
                id=payment_model.id,
                payment_method=payment_model.payment_method,
                payment_provider=payment_model.payment_provider,
                transaction_id=payment_model.transaction_id,
                payment_card_id=payment_model.payment_card_id,
                status=payment_model.status,
                paid_at=payment_model.paid_at,
            )

        return Order(
            id=model.id,
            user_id=model.user_id,
            status=model.status,
            subtotal=self._money(model.subtotal),
            discount=self._money(model.discount),
            shipping_cost=self._money(model.shipping_cost),
            tax=self._money(model.tax),
            total=self._money(model.total),
            payment=model.payment,
            promo_code_id=model.promo_code_id,
            items=items,
            shipping=shipping,
            payment_record=payment_record,
            user_email=model.user.email,
            user_fullname=model.user.fullname,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
