"""
账户API序列化器。
负责请求数据的验证。
"""
from django.core.validators import MinValueValidator, MaxValueValidator
from rest_framework import serializers


class RegisterSerializer(serializers.Serializer):
    """注册请求序列化器"""
    name = serializers.CharField(min_length=2, max_length=100, trim_whitespace=True)
    email = serializers.EmailField(max_length=254)
    password = serializers.CharField(min_length=8, max_length=128, trim_whitespace=False)


class LoginSerializer(serializers.Serializer):
    """登录请求序列化器"""
    email = serializers.EmailField()
    password = serializers.CharField(trim_whitespace=False)


class ForgotPasswordSerializer(serializers.Serializer):
    """申请重置密码请求序列化器"""
    email = serializers.EmailField()


class ResetPasswordSerializer(serializers.Serializer):
    """重置密码请求序列化器"""
    token = serializers.CharField(max_length=128)
    newPassword = serializers.CharField(min_length=8, max_length=128, trim_whitespace=False)


class ChangePasswordSerializer(serializers.Serializer):
    """修改密码请求序列化器"""
    currentPassword = serializers.CharField(trim_whitespace=False)
    newPassword = serializers.CharField(min_length=8, max_length=128, trim_whitespace=False)


class ProfileUpdateSerializer(serializers.Serializer):
    """更新个人资料请求序列化器"""
    fullName = serializers.CharField(min_length=2, max_length=100)
    phone = serializers.CharField(max_length=30, required=False, allow_blank=True, allow_null=True)
    address = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    bio = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    avatar = serializers.CharField(required=False, allow_blank=True, allow_null=True, trim_whitespace=False)


class PaymentCardCreateSerializer(serializers.Serializer):
    """添加支付卡请求序列化器"""
    card_number = serializers.CharField(max_length=32)
    cardholder_name = serializers.CharField(max_length=100)
    expiry_month = serializers.IntegerField(
        required=False,
        allow_null=True,
        validators=[MinValueValidator(1), MaxValueValidator(12)]
    )
    expiry_year = serializers.IntegerField(
        required=False,
        allow_null=True,
        validators=[MinValueValidator(2000), MaxValueValidator(2100)]
    )
    is_default = serializers.BooleanField(required=False, default=False)


class PaymentCardDefaultSerializer(serializers.Serializer):
    """设置默认支付卡请求序列化器"""
    card_id = serializers.UUIDField()


class VisitLogSerializer(serializers.Serializer):
    """访问日志请求序列化器"""
    ip = serializers.IPAddressField(required=False, allow_null=True, allow_blank=True)
    userAgent = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    url = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=500)
    timestamp = serializers.DateTimeField(required=False, allow_null=True)


class BulkDeleteSerializer(serializers.Serializer):
    """批量删除请求序列化器"""
    ids = serializers.ListField(child=serializers.UUIDField(), min_length=1)
