"""
账户模块URL配置。
"""
from django.urls import path, include

urlpatterns = [
    path('api/', include('accounts.api.urls')),
]
