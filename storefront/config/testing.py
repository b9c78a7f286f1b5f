"""
测试配置。
pytest 通过 DJANGO_SETTINGS_MODULE=storefront.config.testing 加载。
内存SQLite、无缓存、快速密码哈希，邮件写入 mail.outbox。
"""
import tempfile

from .base import *
from .env import *
from .log_config import build_logging, configure_loguru

DEBUG = False

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.dummy.DummyCache',
    }
}
CACHE_BACKEND = 'none'
PRODUCT_SETTINGS = {**PRODUCT_SETTINGS, 'CACHE_TIMEOUT': 0}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'

MEDIA_ROOT = tempfile.mkdtemp(prefix='storefront-media-')

LOGGING = build_logging(console_level='ERROR', app_level='ERROR')
configure_loguru('ERROR')

REST_FRAMEWORK['TEST_REQUEST_DEFAULT_FORMAT'] = 'json'
