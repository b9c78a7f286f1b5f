"""
基础配置文件。
包含所有环境共享的Django配置，各环境配置文件在此基础上覆盖。
"""
from .env import (
    BASE_DIR,
    SECRET_KEY,
    ALLOWED_HOSTS,
    LANGUAGE_CODE,
    TIME_ZONE,
    MEDIA_ROOT,
    SHOP_CURRENCY,
    SHOP_FREE_SHIPPING_THRESHOLD,
    SHOP_SHIPPING_COST,
    SHOP_TAX_RATE,
    PASSWORD_RESET_TTL_HOURS,
    FRONTEND_URL,
    PRODUCT_CACHE_TIMEOUT,
    DB_ENGINE,
    DB_NAME,
    DB_USER,
    DB_PASSWORD,
    DB_HOST,
    DB_PORT,
    REDIS_URL,
    REDIS_PASSWORD,
    REDIS_MAX_CONNECTIONS,
    REDIS_KEY_PREFIX,
)

INSTALLED_APPS = [
    'django.contrib.contenttypes',
    'django.contrib.auth',
    'django.contrib.sessions',
    'django.contrib.staticfiles',
    'rest_framework',
    # 业务模块
    'accounts',
    'products',
    'carts',
    'orders',
    'dashboard',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
]

ROOT_URLCONF = 'storefront.urls'
WSGI_APPLICATION = 'storefront.wsgi.application'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
            ],
        },
    },
]

# 用户模型
AUTH_USER_MODEL = 'accounts.User'

AUTH_PASSWORD_VALIDATORS = [
    {'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator', 'OPTIONS': {'min_length': 8}},
]

USE_I18N = True
USE_TZ = True

STATIC_URL = '/static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'
MEDIA_URL = '/media/'

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# DRF配置，各环境再覆盖渲染器等设置
REST_FRAMEWORK = {
    'DEFAULT_AUTHENTICATION_CLASSES': [
        'rest_framework.authentication.SessionAuthentication',
        'rest_framework.authentication.BasicAuthentication',
    ],
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.AllowAny',
    ],
    'EXCEPTION_HANDLER': 'core.infrastructure.exception_handler.unified_exception_handler',
    'DEFAULT_RENDERER_CLASSES': [
        'rest_framework.renderers.JSONRenderer',
    ],
}

# 商城结算配置
SHOP_SETTINGS = {
    'CURRENCY': SHOP_CURRENCY,
    'FREE_SHIPPING_THRESHOLD': SHOP_FREE_SHIPPING_THRESHOLD,
    'SHIPPING_COST': SHOP_SHIPPING_COST,
    'TAX_RATE': SHOP_TAX_RATE,
    'DEFAULT_COUNTRY': 'INDONESIA',
    'DEFAULT_SHIPPING_METHOD': 'STANDARD',
}

# 账户模块配置
ACCOUNT_SETTINGS = {
    'PASSWORD_RESET_TTL_HOURS': PASSWORD_RESET_TTL_HOURS,
    'FRONTEND_URL': FRONTEND_URL,
    'AVATAR_UPLOAD_DIR': 'uploads/avatars/',
}

# 商品模块配置
PRODUCT_SETTINGS = {
    'CACHE_TIMEOUT': PRODUCT_CACHE_TIMEOUT,
    'DEFAULT_PAGE_SIZE': 10,
    'MAX_PAGE_SIZE': 50,
}


def database_settings(**extra) -> dict:
    """读取 DB_* 环境变量生成默认数据库配置，extra 覆盖或补充字段"""
    database = {
        'ENGINE': DB_ENGINE,
        'NAME': DB_NAME,
        'USER': DB_USER,
        'PASSWORD': DB_PASSWORD,
        'HOST': DB_HOST,
        'PORT': DB_PORT,
    }
    if DB_ENGINE.endswith('mysql'):
        database['OPTIONS'] = {'charset': 'utf8mb4', 'use_unicode': True}
    database.update(extra)
    return {'default': database}


def redis_cache_settings(timeout=None, **options) -> dict:
    """
    django-redis 缓存配置。

    Args:
        timeout: 默认过期秒数，None 时使用 Django 的默认值
        **options: 追加到 OPTIONS 中的客户端参数
    """
    cache = {
        'BACKEND': 'django_redis.cache.RedisCache',
        'LOCATION': REDIS_URL,
        'OPTIONS': {
            'CLIENT_CLASS': 'django_redis.client.DefaultClient',
            'CONNECTION_POOL_KWARGS': {'max_connections': REDIS_MAX_CONNECTIONS},
            'PASSWORD': REDIS_PASSWORD or None,
            **options,
        },
        'KEY_PREFIX': REDIS_KEY_PREFIX,
    }
    if timeout is not None:
        cache['TIMEOUT'] = timeout
    return {'default': cache}
