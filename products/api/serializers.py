"""
商品API序列化器。
负责请求数据的验证。
"""
from rest_framework import serializers
from django.core.validators import MinValueValidator, MaxValueValidator

from products.domain import ProductStatus


class ProductCreateSerializer(serializers.Serializer):
    """创建商品请求序列化器"""
    name = serializers.CharField(max_length=200)
    price = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(0)]
    )
    category = serializers.SlugField(max_length=120, required=False, allow_blank=True, allow_null=True)
    stock = serializers.IntegerField(default=0, validators=[MinValueValidator(0)])
    image = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    status = serializers.ChoiceField(choices=ProductStatus.ALL, default=ProductStatus.ACTIVE)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    discount = serializers.DecimalField(
        max_digits=5,
        decimal_places=2,
        required=False,
        default=0,
        validators=[MinValueValidator(0), MaxValueValidator(100)]
    )
    badge = serializers.CharField(max_length=50, required=False, allow_blank=True, default="")
    specification = serializers.JSONField(required=False, default=dict)


class ProductUpdateSerializer(serializers.Serializer):
    """更新商品请求序列化器，name、price、stock 必填"""
    name = serializers.CharField(max_length=200)
    price = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(0)]
    )
    stock = serializers.IntegerField(validators=[MinValueValidator(0)])
    category = serializers.SlugField(max_length=120, required=False, allow_blank=True, allow_null=True)
    image = serializers.CharField(max_length=255, required=False, allow_blank=True)
    status = serializers.ChoiceField(choices=ProductStatus.ALL, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    discount = serializers.DecimalField(
        max_digits=5,
        decimal_places=2,
        required=False,
        validators=[MinValueValidator(0), MaxValueValidator(100)]
    )
    badge = serializers.CharField(max_length=50, required=False, allow_blank=True)
    specification = serializers.JSONField(required=False)


class ProductBulkDeleteSerializer(serializers.Serializer):
    """批量删除商品请求序列化器"""
    ids = serializers.ListField(child=serializers.UUIDField(), min_length=1)
