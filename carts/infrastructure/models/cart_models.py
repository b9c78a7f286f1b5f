"""
购物车基础设施层数据库模型。
定义购物车、购物车商品和收藏的Django ORM模型。
"""
import uuid
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models


class Cart(models.Model):
    """购物车数据库模型，每个用户一个"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='cart',
        verbose_name="用户"
    )
    created_at = models.DateTimeField(auto_now_add=True, verbose_name="创建时间")
    updated_at = models.DateTimeField(auto_now=True, verbose_name="更新时间")

    class Meta:
        db_table = 'carts'
        verbose_name = "购物车"
        verbose_name_plural = "购物车"


class CartItem(models.Model):
    """购物车商品数据库模型"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    cart = models.ForeignKey(
        Cart,
        on_delete=models.CASCADE,
        related_name='items',
        verbose_name="购物车"
    )
    product = models.ForeignKey(
        'products.Product',
        on_delete=models.CASCADE,
        related_name='cart_items',
        verbose_name="商品"
    )
    quantity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)], verbose_name="数量")
    price_at_time = models.DecimalField(max_digits=12, decimal_places=2, verbose_name="加入时价格")
    created_at = models.DateTimeField(auto_now_add=True, verbose_name="加入时间")

    class Meta:
        db_table = 'cart_items'
        verbose_name = "购物车商品"
        verbose_name_plural = "购物车商品"
        constraints = [
            models.UniqueConstraint(fields=['cart', 'product'], name='uniq_cart_product'),
        ]


class Favorite(models.Model):
    """收藏数据库模型"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='favorites',
        verbose_name="用户"
    )
    product = models.ForeignKey(
        'products.Product',
        on_delete=models.CASCADE,
        related_name='favorites',
        verbose_name="商品"
    )
    created_at = models.DateTimeField(auto_now_add=True, verbose_name="收藏时间")

    class Meta:
        db_table = 'favorites'
        verbose_name = "收藏"
        verbose_name_plural = "收藏"
        constraints = [
            models.UniqueConstraint(fields=['user', 'product'], name='uniq_favorite_user_product'),
        ]
