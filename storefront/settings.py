"""
配置入口。
DJANGO_ENV 选择 storefront/config 下的环境配置：development（默认）、production、testing。
"""
import os

_ENV = os.environ.get('DJANGO_ENV', 'development').lower()

if _ENV == 'production':
    from .config.production import *  # noqa: F401,F403
elif _ENV == 'testing':
    from .config.testing import *  # noqa: F401,F403
else:
    from .config.development import *  # noqa: F401,F403
