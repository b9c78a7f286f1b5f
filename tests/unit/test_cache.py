"""应用缓存和缓存失效事件测试"""
from unittest import mock

import pytest

from core.domain import DomainEvents, OrderPlacedEvent, ProductRatingChangedEvent, ProductStockChangedEvent
from core.infrastructure.cache import (
    MemoryCacheService,
    NoCacheService,
    get_cache_service,
    reset_cache_service,
)
from products.infrastructure.services.cache_manager import ProductCacheManager


def test_memory_cache_roundtrip_and_delete():
    cache = MemoryCacheService()

    assert cache.get("missing") is None
    cache.set("product:1", {"name": "Mouse"}, ttl=60)
    assert cache.get("product:1") == {"name": "Mouse"}
    assert cache.delete("product:1") is True
    assert cache.get("product:1") is None
    assert cache.delete("product:1") is False


def test_memory_cache_entry_expires_with_its_own_ttl():
    cache = MemoryCacheService(max_ttl=300)

    with mock.patch("core.infrastructure.cache.time.monotonic", return_value=1000.0):
        cache.set("short", "value", ttl=10)
    with mock.patch("core.infrastructure.cache.time.monotonic", return_value=1005.0):
        assert cache.get("short") == "value"
    with mock.patch("core.infrastructure.cache.time.monotonic", return_value=1011.0):
        assert cache.get("short") is None


def test_no_cache_never_hits():
    cache = NoCacheService()
    cache.set("key", "value")

    assert cache.get("key") is None


@pytest.mark.parametrize("backend, expected", [
    ("memory", MemoryCacheService),
    ("none", NoCacheService),
])
def test_cache_service_follows_setting(settings, backend, expected):
    settings.CACHE_BACKEND = backend
    reset_cache_service()

    service = get_cache_service()

    assert isinstance(service, expected)
    assert get_cache_service() is service


def test_product_cache_skips_writes_when_timeout_is_zero():
    cache = MemoryCacheService()
    manager = ProductCacheManager(cache, timeout=0)

    manager.set_product("p1", {"id": "p1"})

    assert manager.get_product("p1") is None


def test_stock_and_order_events_invalidate_product_cache(settings):
    settings.CACHE_BACKEND = "memory"
    reset_cache_service()
    manager = ProductCacheManager(get_cache_service(), timeout=60)
    manager.set_product("p1", {"id": "p1"})
    manager.set_product("p2", {"id": "p2"})

    DomainEvents.publish(ProductStockChangedEvent("p1", 5, 3, "order"))
    assert manager.get_product("p1") is None
    assert manager.get_product("p2") == {"id": "p2"}

    DomainEvents.publish(OrderPlacedEvent("o1", "u1", "10.00", ["p2"]))
    assert manager.get_product("p2") is None


def test_rating_change_invalidates_product_cache(settings):
    settings.CACHE_BACKEND = "memory"
    reset_cache_service()
    manager = ProductCacheManager(get_cache_service(), timeout=60)
    manager.set_product("p1", {"id": "p1", "rating": 0.0})

    DomainEvents.publish(ProductRatingChangedEvent("p1", "4.5"))

    assert manager.get_product("p1") is None


def test_product_cache_timeout_follows_current_settings(settings):
    settings.PRODUCT_SETTINGS = {**settings.PRODUCT_SETTINGS, 'CACHE_TIMEOUT': 60}

    assert ProductCacheManager(MemoryCacheService()).timeout == 60
