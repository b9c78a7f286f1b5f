"""
促销码仓储的Django实现。
"""
from typing import Any, Optional

from django.db import IntegrityError, transaction
from django.db.models import F

from core.domain import BusinessRuleViolationException
from orders.domain.entities import PromoCode, PromoRedemption
from orders.domain.repositories import PromoCodeRepository
from orders.infrastructure.models.order_models import (
    PromoCode as PromoCodeModel,
    PromoRedemption as PromoRedemptionModel,
)


class DjangoPromoCodeRepository(PromoCodeRepository):
    """基于Django ORM的促销码仓储实现"""

    def get_active_by_code(self, code: str) -> Optional[PromoCode]:
        model = PromoCodeModel.objects.filter(code=(code or "").strip().upper(), is_active=True).first()
        return self._to_domain_entity(model) if model else None

    def has_redeemed(self, promo_id: Any, user_id: Any) -> bool:
        return PromoRedemptionModel.objects.filter(promo_id=promo_id, user_id=user_id).exists()

    def add_redemption(self, redemption: PromoRedemption) -> PromoRedemption:
        """
        记录促销码使用。

        Raises:
            BusinessRuleViolationException: 同一用户并发下单时已被另一笔订单使用
        """
        try:
            with transaction.atomic():
                model = PromoRedemptionModel.objects.create(
                    id=redemption.id,
                    promo_id=redemption.promo_id,
                    user_id=redemption.user_id,
                    order_id=redemption.order_id,
                )
        except IntegrityError:
            raise BusinessRuleViolationException("promo_already_redeemed", "您已经使用过该促销码")
        redemption.redeemed_at = model.redeemed_at
        return redemption

    def increment_used_count(self, promo_id: Any) -> None:
        PromoCodeModel.objects.filter(id=promo_id).update(used_count=F('used_count') + 1)

    def _to_domain_entity(self, model: PromoCodeModel) -> PromoCode:
        return PromoCode(
            id=model.id,
            code=model.code,
            description=model.description,
            discount_type=model.discount_type,
            discount_value=model.discount_value,
            min_order_amount=model.min_order_amount,
            max_discount=model.max_discount,
            usage_limit=model.usage_limit,
            used_count=model.used_count,
            start_at=model.start_at,
            expires_at=model.expires_at,
            is_active=model.is_active,
        )
