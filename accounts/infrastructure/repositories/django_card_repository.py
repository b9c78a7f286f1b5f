"""
基于Django ORM的支付卡和访问日志仓储实现。
"""
from datetime import datetime
from typing import Any, List, Optional

from accounts.domain import PaymentCardRepository, VisitRepository, PaymentCard
from accounts.infrastructure.models.account_models import (
    PaymentCard as PaymentCardModel,
    UserVisit as UserVisitModel,
)


class DjangoPaymentCardRepository(PaymentCardRepository):
    """基于Django ORM的支付卡仓储实现"""

    def get_by_id(self, id: Any) -> Optional[PaymentCard]:
        try:
            return self._to_domain_entity(PaymentCardModel.objects.get(id=id))
        except (PaymentCardModel.DoesNotExist, ValueError, TypeError):
            return None

    def get_for_user(self, card_id: Any, user_id: Any) -> Optional[PaymentCard]:
        try:
            model = PaymentCardModel.objects.get(id=card_id, user_id=user_id)
            return self._to_domain_entity(model)
        except (PaymentCardModel.DoesNotExist, ValueError, TypeError):
            return None

    def list_for_user(self, user_id: Any) -> List[PaymentCard]:
        models = PaymentCardModel.objects.filter(user_id=user_id).order_by('-is_default', '-created_at')
        return [self._to_domain_entity(model) for model in models]

    def find_by_fingerprint(self, user_id: Any, fingerprint: str) -> Optional[PaymentCard]:
        model = PaymentCardModel.objects.filter(user_id=user_id, fingerprint=fingerprint).first()
        return self._to_domain_entity(model) if model else None

    def count_for_user(self, user_id: Any) -> int:
        return PaymentCardModel.objects.filter(user_id=user_id).count()

    def unset_default(self, user_id: Any) -> None:
        PaymentCardModel.objects.filter(user_id=user_id, is_default=True).update(is_default=False)

    def save(self, card: PaymentCard) -> PaymentCard:
        model, _ = PaymentCardModel.objects.update_or_create(
            id=card.id,
            defaults={
                'user_id': card.user_id,
                'card_brand': card.card_brand,
                'cardholder_name': card.cardholder_name,
                'last4': card.last4,
                'fingerprint': card.fingerprint,
                'expiry_month': card.expiry_month,
                'expiry_year': card.expiry_year,
                'is_default': card.is_default,
            }
        )
        return self._to_domain_entity(model)

    def delete(self, card: PaymentCard) -> None:
        PaymentCardModel.objects.filter(id=card.id).delete()

    def _to_domain_entity(self, model: PaymentCardModel) -> PaymentCard:
        return PaymentCard(
            id=model.id,
            user_id=model.user_id,
            card_brand=model.card_brand,
            cardholder_name=model.cardholder_name,
            last4=model.last4,
            fingerprint=model.fingerprint,
            expiry_month=model.expiry_month,
            expiry_year=model.expiry_year,
            is_default=model.is_default,
            created_at=model.created_at,
        )


class DjangoVisitRepository(VisitRepository):
    """基于Django ORM的访问日志仓储实现"""

    def add(
        self,
        ip: Optional[str],
        user_agent: str,
        url: str,
        timestamp: datetime,
        user_id: Any = None
    ) -> Any:
        visit = UserVisitModel.objects.create(
            ip=ip or None,
            user_agent=user_agent or "",
            url=(url or "")[:500],
            timestamp=timestamp,
            user_id=user_id,
        )
        return visit.id
