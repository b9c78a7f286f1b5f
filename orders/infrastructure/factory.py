"""
订单基础设施层工厂。
负责创建订单领域的仓储实例。
"""
from orders.domain import OrderRepository, PromoCodeRepository
from orders.infrastructure.repositories.django_order_repository import DjangoOrderRepository
from orders.infrastructure.repositories.django_promo_repository import DjangoPromoCodeRepository


class OrderInfrastructureFactory:
    """
    订单基础设施层工厂类。
    """

    def __init__(self, currency: str = "USD"):
        self.currency = currency

        self._order_repository = None
        self._promo_repository = None

    def create_order_repository(self) -> OrderRepository:
        if not self._order_repository:
            self._order_repository = DjangoOrderRepository(currency=self.currency)
        return self._order_repository

    def create_promo_repository(self) -> PromoCodeRepository:
        if not self._promo_repository:
            self._promo_repository = DjangoPromoCodeRepository()
        return self._promo_repository
