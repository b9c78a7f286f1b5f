"""
基础设施层公共组件：事务、应用缓存。
响应信封和异常处理器从各自模块直接导入。
"""
from core.infrastructure.transaction import TransactionManager, DjangoTransactionManager
from core.infrastructure.cache import (
    CacheService,
    RedisCacheService,
    MemoryCacheService,
    NoCacheService,
    get_cache_service,
    reset_cache_service,
)

__all__ = [
    'TransactionManager',
    'DjangoTransactionManager',
    'CacheService',
    'RedisCacheService',
    'MemoryCacheService',
    'NoCacheService',
    'get_cache_service',
    'reset_cache_service',
]
