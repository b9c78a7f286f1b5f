"""
环境变量。
启动时读取 storefront/config/.env（存在时），进程环境中已有的变量优先。
"""
import os
import warnings
from decimal import Decimal
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent.parent

ENV_FILE = Path(__file__).resolve().parent / '.env'
if ENV_FILE.exists():
    load_dotenv(dotenv_path=ENV_FILE, encoding='utf-8')


def _to_bool(raw: str) -> bool:
    return raw.strip().lower() in ('1', 'true', 'yes', 'y', 'on')


def _to_list(raw: str) -> list:
    return [part.strip() for part in raw.split(',') if part.strip()]


_PARSERS: Dict[type, Callable[[str], Any]] = {bool: _to_bool, list: _to_list}


def get_env(name: str, default: Any = None, cast_type: Optional[type] = None) -> Any:
    """
    读取环境变量。

    Args:
        name: 变量名
        default: 未设置或转换失败时的值
        cast_type: 转换类型；bool 接受 1/true/yes/on，list 按逗号分隔

    Returns:
        转换后的值
    """
    raw = os.environ.get(name)
    if raw is None:
        return default
    if cast_type is None:
        return raw

    parse = _PARSERS.get(cast_type, cast_type)
    try:
        return parse(raw)
    except (ValueError, TypeError, ArithmeticError):
        warnings.warn(f"环境变量 {name}={raw!r} 无法转换为 {cast_type.__name__}，使用默认值 {default!r}")
        return default


DEBUG = get_env('DEBUG', True, bool)
SECRET_KEY = get_env('SECRET_KEY', 'django-insecure-storefront-dev-key-change-me')
ALLOWED_HOSTS = get_env('ALLOWED_HOSTS', ['localhost', '127.0.0.1'], list)

# 数据库，默认 MySQL
DB_ENGINE = get_env('DB_ENGINE', 'django.db.backends.mysql')
DB_NAME = get_env('DB_NAME', 'storefront')
DB_USER = get_env('DB_USER', 'root')
DB_PASSWORD = get_env('DB_PASSWORD', '')
DB_HOST = get_env('DB_HOST', '127.0.0.1')
DB_PORT = get_env('DB_PORT', '3306')

REDIS_URL = get_env('REDIS_URL', 'redis://localhost:6379/1')
REDIS_PASSWORD = get_env('REDIS_PASSWORD', '')
REDIS_MAX_CONNECTIONS = get_env('REDIS_MAX_CONNECTIONS', 100, int)
REDIS_KEY_PREFIX = get_env('REDIS_KEY_PREFIX', 'storefront')

# 应用缓存后端: redis / memory / none
CACHE_BACKEND = get_env('CACHE_BACKEND', 'redis')

LANGUAGE_CODE = get_env('LANGUAGE_CODE', 'zh-hans')
TIME_ZONE = get_env('TIME_ZONE', 'Asia/Jakarta')

EMAIL_BACKEND = get_env('EMAIL_BACKEND', 'django.core.mail.backends.smtp.EmailBackend')
EMAIL_HOST = get_env('EMAIL_HOST', 'localhost')
EMAIL_PORT = get_env('EMAIL_PORT', 587, int)
EMAIL_HOST_USER = get_env('EMAIL_HOST_USER', '')
EMAIL_HOST_PASSWORD = get_env('EMAIL_HOST_PASSWORD', '')
EMAIL_USE_TLS = get_env('EMAIL_USE_TLS', True, bool)
DEFAULT_FROM_EMAIL = get_env('DEFAULT_FROM_EMAIL', 'no-reply@storefront.local')

# 重置密码邮件中的前端链接
FRONTEND_URL = get_env('FRONTEND_URL', 'http://localhost:3000')
PASSWORD_RESET_TTL_HOURS = get_env('PASSWORD_RESET_TTL_HOURS', 24, int)

MEDIA_ROOT = get_env('MEDIA_ROOT', os.path.join(BASE_DIR, 'media'))

SHOP_CURRENCY = get_env('SHOP_CURRENCY', 'USD')
SHOP_FREE_SHIPPING_THRESHOLD = get_env('SHOP_FREE_SHIPPING_THRESHOLD', Decimal('500'), Decimal)
SHOP_SHIPPING_COST = get_env('SHOP_SHIPPING_COST', Decimal('15'), Decimal)
SHOP_TAX_RATE = get_env('SHOP_TAX_RATE', Decimal('0.10'), Decimal)

PRODUCT_CACHE_TIMEOUT = get_env('PRODUCT_CACHE_TIMEOUT', 3600, int)

LOG_LEVEL = get_env('LOG_LEVEL', 'INFO').upper()
LOG_DIR = get_env('LOG_DIR', os.path.join(BASE_DIR, 'logs'))
