"""
后台报表模块URL配置。
"""
from django.urls import path, include

urlpatterns = [
    # API路由
    path('api/', include('dashboard.api.urls')),
]
