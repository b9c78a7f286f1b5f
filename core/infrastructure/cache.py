"""
应用缓存。
目前用于商品详情。settings.CACHE_BACKEND 选择实现：redis / memory / none。
缓存读写失败只记录日志，调用方按未命中处理。
"""
from abc import ABC, abstractmethod
import pickle
import time
from typing import Any, Optional

from cachetools import TTLCache
from django.conf import settings
from loguru import logger
import redis


class CacheService(ABC):

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """未命中返回None"""

    @abstractmethod
    def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """写入并设置过期秒数，返回是否成功"""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """返回键是否存在过"""


class RedisCacheService(CacheService):
    """
    Redis 缓存，值用 pickle 序列化。
    进程内另有一层 TTLCache，命中时不访问 Redis；本进程的 set/delete 同步更新这一层，
    其他进程的失效最多延迟 local_ttl 秒可见。
    """

    def __init__(self, client: redis.Redis, prefix: str = "storefront:",
                 local_size: int = 1000, local_ttl: int = 60):
        self.client = client
        self.prefix = prefix
        self.local = TTLCache(maxsize=local_size, ttl=local_ttl)

    def _key(self, key: str) -> str:
        return self.prefix + key

    def get(self, key: str) -> Optional[Any]:
        if key in self.local:
            return self.local[key]
        try:
            raw = self.client.get(self._key(key))
            value = pickle.loads(raw) if raw else None
        except (redis.RedisError, pickle.PickleError) as e:
            logger.error(f"读取缓存 {key} 失败: {e}")
            return None
        if value is not None:
            self.local[key] = value
        return value

    def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        self.local[key] = value
        try:
            return bool(self.client.setex(self._key(key), ttl, pickle.dumps(value)))
        except (redis.RedisError, pickle.PickleError) as e:
            logger.error(f"写入缓存 {key} 失败: {e}")
            return False

    def delete(self, key: str) -> bool:
        self.local.pop(key, None)
        try:
            return self.client.delete(self._key(key)) > 0
        except redis.RedisError as e:
            logger.error(f"删除缓存 {key} 失败: {e}")
            return False


class MemoryCacheService(CacheService):
    """
    单进程内存缓存。
    TTLCache 的 ttl 是所有条目的上限，条目自己的过期时间与值一起保存。
    """

    def __init__(self, maxsize: int = 1000, max_ttl: int = 300):
        self.entries = TTLCache(maxsize=maxsize, ttl=max_ttl)
        self.max_ttl = max_ttl

    def get(self, key: str) -> Optional[Any]:
        value, deadline = self.entries.get(key, (None, 0))
        if deadline > time.monotonic():
            return value
        self.entries.pop(key, None)
        return None

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        lifetime = self.max_ttl if ttl is None else min(ttl, self.max_ttl)
        self.entries[key] = (value, time.monotonic() + lifetime)
        return True

    def delete(self, key: str) -> bool:
        return self.entries.pop(key, None) is not None


class NoCacheService(CacheService):
    """不缓存，测试配置使用"""

    def get(self, key: str) -> Optional[Any]:
        return None

    def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        return True

    def delete(self, key: str) -> bool:
        return False


_shared: Optional[CacheService] = None


def _build_cache_service(backend: str) -> CacheService:
    if backend == 'redis':
        from django_redis import get_redis_connection
        prefix = getattr(settings, 'REDIS_KEY_PREFIX', 'storefront')
        return RedisCacheService(get_redis_connection("default"), prefix=f"{prefix}:")
    if backend == 'memory':
        return MemoryCacheService()
    return NoCacheService()


def get_cache_service() -> CacheService:
    """进程内共享的缓存服务，首次调用时按 settings.CACHE_BACKEND 创建"""
    global _shared
    if _shared is None:
        _shared = _build_cache_service(getattr(settings, 'CACHE_BACKEND', 'none'))
        logger.info(f"缓存服务: {type(_shared).__name__}")
    return _shared


def reset_cache_service() -> None:
    global _shared
    _shared = None
