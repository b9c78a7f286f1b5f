"""
账户API URL配置。
"""
from django.urls import path
from accounts.api import views

urlpatterns = [
    # 认证
    path('auth/register', views.RegisterView.as_view(), name='auth-register'),
    path('auth/login', views.LoginView.as_view(), name='auth-login'),
    path('auth/logout', views.LogoutView.as_view(), name='auth-logout'),
    path('auth/forgot-password', views.ForgotPasswordView.as_view(), name='auth-forgot-password'),
    path('auth/verify-reset-token', views.VerifyResetTokenView.as_view(), name='auth-verify-reset-token'),
    path('auth/reset-password', views.ResetPasswordView.as_view(), name='auth-reset-password'),

    # 个人设置
    path('setting/user', views.ProfileView.as_view(), name='setting-user'),
    path('setting/user/update', views.ProfileUpdateView.as_view(), name='setting-user-update'),
    path('setting/user/password', views.ChangePasswordView.as_view(), name='setting-user-password'),
    path('setting/user/cards', views.PaymentCardView.as_view(), name='setting-user-cards'),

    # 访问日志
    path('log-user-visit', views.UserVisitView.as_view(), name='log-user-visit'),

    # 后台用户管理
    path('admin/users', views.AdminUserListView.as_view(), name='admin-user-list'),
    path('admin/users/bulk-delete', views.AdminUserBulkDeleteView.as_view(), name='admin-user-bulk-delete'),
]
