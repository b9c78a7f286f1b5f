"""
商品模块配置文件。
从Django设置中获取商品模块的配置。
"""
from django.conf import settings

# 获取商品模块配置，如果不存在则使用默认值
PRODUCT_SETTINGS = getattr(settings, 'PRODUCT_SETTINGS', {})


def cache_timeout() -> int:
    """商品详情缓存超时（秒），为0时不缓存。每次读取当前设置"""
    return getattr(settings, 'PRODUCT_SETTINGS', {}).get('CACHE_TIMEOUT', 3600)


# 分页配置
DEFAULT_PAGE_SIZE = PRODUCT_SETTINGS.get('DEFAULT_PAGE_SIZE', 10)
MAX_PAGE_SIZE = PRODUCT_SETTINGS.get('MAX_PAGE_SIZE', 50)

# 商品缓存键
PRODUCT_CACHE_KEY = "product:{product_id}"
