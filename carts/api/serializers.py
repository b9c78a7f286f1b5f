"""
购物车API序列化器。
"""
from rest_framework import serializers


class CartAddSerializer(serializers.Serializer):
    """加入购物车请求序列化器"""
    productId = serializers.CharField(max_length=64)
    quantity = serializers.IntegerField(min_value=1, default=1)


class CartUpdateSerializer(serializers.Serializer):
    """修改购物车数量请求序列化器"""
    itemId = serializers.CharField(max_length=64)
    quantity = serializers.IntegerField(min_value=1)


class CartRemoveSerializer(serializers.Serializer):
    itemId = serializers.CharField(max_length=64)


class FavoriteAddSerializer(serializers.Serializer):
    productId = serializers.CharField(max_length=64)


class FavoriteRemoveSerializer(serializers.Serializer):
    productId = serializers.UUIDField()
