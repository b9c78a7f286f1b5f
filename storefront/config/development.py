"""
开发环境配置。
MySQL + Redis，日志输出到控制台和 logs/ 目录，保留 DRF 的可浏览API。
"""
from .base import *
from .env import *
from .log_config import build_logging, configure_loguru

DEBUG = True

SECURE_SSL_REDIRECT = False
SESSION_COOKIE_SECURE = False
CSRF_COOKIE_SECURE = False

DATABASES = database_settings()
CACHES = redis_cache_settings()

EMAIL_BACKEND = 'django.core.mail.backends.console.EmailBackend'

LOGGING = build_logging(console_level='DEBUG', app_level='DEBUG', log_dir=LOG_DIR)
configure_loguru('DEBUG', LOG_DIR)

REST_FRAMEWORK['DEFAULT_RENDERER_CLASSES'] = [
    'rest_framework.renderers.JSONRenderer',
    'rest_framework.renderers.BrowsableAPIRenderer',
]
