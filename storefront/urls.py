"""
storefront 项目URL配置。
所有业务模块的接口都挂载在 /api/ 下。
"""
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static

urlpatterns = [
    # 账户模块API
    path('', include('accounts.urls')),
    # 商品模块API
    path('', include('products.urls')),
    # 购物车与收藏API
    path('', include('carts.urls')),
    # 订单模块API
    path('', include('orders.urls')),
    # 后台报表API
    path('', include('dashboard.urls')),
]

# 在开发环境中提供上传文件服务
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
