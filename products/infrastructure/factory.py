"""
商品基础设施工厂。
同一个工厂实例内，每种仓储只创建一次。
"""
from core.infrastructure.cache import CacheService
from core.infrastructure.transaction import TransactionManager
from products.domain import (
    ProductRepository,
    CategoryRepository,
    ProductReviewRepository,
    StockMovementRepository,
)
from products.infrastructure.repositories.django_product_repository import DjangoProductRepository
from products.infrastructure.repositories.django_category_repository import DjangoCategoryRepository
from products.infrastructure.repositories.django_review_repository import (
    DjangoProductReviewRepository,
    DjangoStockMovementRepository,
)
from products.infrastructure.services.cache_manager import ProductCacheManager


class ProductInfrastructureFactory:

    def __init__(self, cache_service: CacheService, transaction_manager: TransactionManager, currency: str = "USD"):
        self.cache_service = cache_service
        self.transaction_manager = transaction_manager
        self.currency = currency
        self._instances = {}

    def _once(self, name: str, build):
        if name not in self._instances:
            self._instances[name] = build()
        return self._instances[name]

    def create_product_repository(self) -> ProductRepository:
        return self._once('products', lambda: DjangoProductRepository(currency=self.currency))

    def create_category_repository(self) -> CategoryRepository:
        return self._once('categories', DjangoCategoryRepository)

    def create_review_repository(self) -> ProductReviewRepository:
        return self._once('reviews', DjangoProductReviewRepository)

    def create_stock_movement_repository(self) -> StockMovementRepository:
        return self._once('stock_movements', DjangoStockMovementRepository)

    def create_cache_manager(self) -> ProductCacheManager:
        """商品详情缓存，超时取 PRODUCT_SETTINGS['CACHE_TIMEOUT']"""
        return self._once('cache_manager', lambda: ProductCacheManager(cache_service=self.cache_service))
