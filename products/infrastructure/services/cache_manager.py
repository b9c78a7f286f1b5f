"""
商品缓存管理服务。
负责商品详情缓存的读写和失效。
"""
from typing import Any, Dict, Optional

from loguru import logger

from core.domain.events import (
    DomainEvents,
    OrderPlacedEvent,
    ProductRatingChangedEvent,
    ProductStockChangedEvent,
)
from core.infrastructure.cache import CacheService, get_cache_service
from products.domain.config import PRODUCT_CACHE_KEY, cache_timeout


class ProductCacheManager:
    """
    商品缓存管理服务。
    缓存超时为0时不写入缓存。
    """

    def __init__(self, cache_service: CacheService, timeout: Optional[int] = None):
        """
        初始化缓存管理服务。

        Args:
            cache_service: 缓存服务
            timeout: 商品详情缓存超时（秒），默认取 PRODUCT_SETTINGS
        """
        self.cache_service = cache_service
        self.timeout = cache_timeout() if timeout is None else timeout

    @staticmethod
    def product_key(product_id: Any) -> str:
        return PRODUCT_CACHE_KEY.format(product_id=product_id)

    def get_product(self, product_id: Any) -> Optional[Dict[str, Any]]:
        return self.cache_service.get(self.product_key(product_id))

    def set_product(self, product_id: Any, data: Dict[str, Any]) -> None:
        if self.timeout > 0:
            self.cache_service.set(self.product_key(product_id), data, self.timeout)

    def invalidate_product(self, product_id: Any) -> None:
        self.cache_service.delete(self.product_key(product_id))
        logger.debug(f"商品缓存已失效: {product_id}")


def handle_product_changed(event) -> None:
    """库存或评分变化后使商品详情缓存失效"""
    ProductCacheManager(get_cache_service()).invalidate_product(event.product_id)


def handle_order_placed(event: OrderPlacedEvent) -> None:
    """下单后使订单中所有商品的详情缓存失效"""
    manager = ProductCacheManager(get_cache_service())
    for product_id in event.product_ids:
        manager.invalidate_product(product_id)


def register_cache_handlers() -> None:
    """注册缓存失效的领域事件处理器"""
    DomainEvents.register(ProductStockChangedEvent, handle_product_changed)
    DomainEvents.register(ProductRatingChangedEvent, handle_product_changed)
    DomainEvents.register(OrderPlacedEvent, handle_order_placed)
