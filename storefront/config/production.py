"""
生产环境配置。
持久数据库连接、带超时和压缩的Redis缓存、滚动日志文件、HTTPS相关安全设置和接口限流。
"""
from .base import *
from .env import *
from .log_config import build_logging, configure_loguru

DEBUG = False

DATABASES = database_settings(CONN_MAX_AGE=60)
CACHES = redis_cache_settings(
    timeout=300,
    SOCKET_TIMEOUT=5,
    SOCKET_CONNECT_TIMEOUT=5,
    COMPRESSOR='django_redis.compressors.zlib.ZlibCompressor',
)

LOGGING = build_logging(console_level='WARNING', app_level=LOG_LEVEL, log_dir=LOG_DIR, rotating=True)
configure_loguru(LOG_LEVEL, LOG_DIR)

SECURE_CONTENT_TYPE_NOSNIFF = True
SECURE_HSTS_SECONDS = 365 * 24 * 3600
SECURE_HSTS_INCLUDE_SUBDOMAINS = True
SECURE_SSL_REDIRECT = True
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True

REST_FRAMEWORK['DEFAULT_THROTTLE_CLASSES'] = [
    'rest_framework.throttling.AnonRateThrottle',
    'rest_framework.throttling.UserRateThrottle',
]
REST_FRAMEWORK['DEFAULT_THROTTLE_RATES'] = {
    'anon': '1000/day',
    'user': '10000/day',
}
