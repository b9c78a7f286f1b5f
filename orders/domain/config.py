"""
订单模块配置文件。
从Django设置中获取结算相关配置。
"""
from decimal import Decimal
from django.conf import settings

# 获取结算配置，如果不存在则使用默认值
SHOP_SETTINGS = getattr(settings, 'SHOP_SETTINGS', {})

CURRENCY = SHOP_SETTINGS.get('CURRENCY', 'USD')

# 小计超过该金额免运费
FREE_SHIPPING_THRESHOLD = Decimal(str(SHOP_SETTINGS.get('FREE_SHIPPING_THRESHOLD', 500)))
SHIPPING_COST = Decimal(str(SHOP_SETTINGS.get('SHIPPING_COST', 15)))
TAX_RATE = Decimal(str(SHOP_SETTINGS.get('TAX_RATE', '0.10')))

# 收货信息默认值
DEFAULT_COUNTRY = SHOP_SETTINGS.get('DEFAULT_COUNTRY', 'INDONESIA')
DEFAULT_SHIPPING_METHOD = SHOP_SETTINGS.get('DEFAULT_SHIPPING_METHOD', 'STANDARD')
