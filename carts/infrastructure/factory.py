"""
购物车基础设施层工厂。
负责创建购物车和收藏仓储实例。
"""
from carts.domain import CartRepository, FavoriteRepository
from carts.infrastructure.repositories.django_cart_repository import (
    DjangoCartRepository,
    DjangoFavoriteRepository,
)
from products.domain import ProductRepository
from products.infrastructure.repositories.django_product_repository import DjangoProductRepository


class CartInfrastructureFactory:
    """
    购物车基础设施层工厂类。
    购物车和收藏仓储共用同一个商品仓储。
    """

    def __init__(self, currency: str = "USD"):
        self.currency = currency

        self._product_repository = None
        self._cart_repository = None
        self._favorite_repository = None

    def create_product_repository(self) -> ProductRepository:
        if not self._product_repository:
            self._product_repository = DjangoProductRepository(currency=self.currency)
        return self._product_repository

    def create_cart_repository(self) -> CartRepository:
        if not self._cart_repository:
            self._cart_repository = DjangoCartRepository(self.create_product_repository())
        return self._cart_repository

    def create_favorite_repository(self) -> FavoriteRepository:
        if not self._favorite_repository:
            self._favorite_repository = DjangoFavoriteRepository(self.create_product_repository())
        return self._favorite_repository
