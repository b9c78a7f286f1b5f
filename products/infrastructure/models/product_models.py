"""
商品基础设施层数据库模型。
定义与商品目录相关的Django ORM模型。
"""
import uuid
from decimal import Decimal
from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone


class Category(models.Model):
    """商品分类数据库模型"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100, verbose_name="分类名称")
    slug = models.SlugField(max_length=120, unique=True, verbose_name="分类标识")
    description = models.TextField(blank=True, default="", verbose_name="分类描述")
    image = models.CharField(max_length=255, blank=True, default="", verbose_name="分类图片")
    icon = models.CharField(max_length=100, blank=True, default="", verbose_name="分类图标")

    class Meta:
        db_table = 'categories'
        verbose_name = "商品分类"
        verbose_name_plural = "商品分类"
        ordering = ['name']

    def __str__(self):
        return self.name


class Product(models.Model):
    """商品数据库模型"""

    class StatusChoices(models.TextChoices):
        ACTIVE = 'active', '上架'
        INACTIVE = 'inactive', '下架'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200, verbose_name="商品名称")
    description = models.TextField(blank=True, default="", verbose_name="商品描述")
    price = models.DecimalField(max_digits=12, decimal_places=2, verbose_name="价格")
    discount = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal("0"),
        validators=[MinValueValidator(0), MaxValueValidator(100)],
        verbose_name="折扣百分比"
    )
    image = models.CharField(max_length=255, blank=True, default="", verbose_name="商品图片")
    rating = models.DecimalField(max_digits=2, decimal_places=1, default=Decimal("0"), verbose_name="评分")
    sales = models.PositiveIntegerField(default=0, verbose_name="销量")
    specification = models.JSONField(default=dict, blank=True, verbose_name="规格")
    status = models.CharField(
        max_length=20,
        choices=StatusChoices.choices,
        default=StatusChoices.ACTIVE,
        verbose_name="状态"
    )
    stock = models.PositiveIntegerField(default=0, verbose_name="库存")
    badge = models.CharField(max_length=50, blank=True, default="", verbose_name="角标")
    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='products',
        verbose_name="商品分类"
    )
    date_added = models.DateTimeField(default=timezone.now, verbose_name="上架时间")
    updated_at = models.DateTimeField(auto_now=True, verbose_name="更新时间")

    class Meta:
        db_table = 'products'
        verbose_name = "商品"
        verbose_name_plural = "商品"
        indexes = [
            models.Index(fields=['name'], name='idx_product_name'),
            models.Index(fields=['status'], name='idx_product_status'),
            models.Index(fields=['status', 'category'], name='idx_product_status_category'),
            models.Index(fields=['date_added'], name='idx_product_date_added'),
        ]
        constraints = [
            models.CheckConstraint(condition=models.Q(price__gte=0), name='product_price_gte_0'),
        ]

    def __str__(self):
        return self.name


class ProductReview(models.Model):
    """商品评价数据库模型，同一订单中的同一商品每个用户只能评价一次"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='product_reviews',
        verbose_name="用户"
    )
    order = models.ForeignKey(
        'orders.Order',
        on_delete=models.CASCADE,
        related_name='reviews',
        verbose_name="订单"
    )
    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name='reviews',
        verbose_name="商品"
    )
    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(5)],
        verbose_name="评分"
    )
    review = models.TextField(max_length=1000, blank=True, default="", verbose_name="评价内容")
    created_at = models.DateTimeField(auto_now_add=True, verbose_name="创建时间")

    class Meta:
        db_table = 'product_reviews'
        verbose_name = "商品评价"
        verbose_name_plural = "商品评价"
        constraints = [
            models.UniqueConstraint(fields=['user', 'order', 'product'], name='uniq_review_user_order_product'),
        ]


class StockMovement(models.Model):
    """库存变动记录数据库模型"""

    class ReasonChoices(models.TextChoices):
        INITIAL = 'initial', '初始库存'
        ADJUSTMENT = 'adjustment', '手动调整'
        ORDER = 'order', '订单扣减'

    id = models.BigAutoField(primary_key=True)
    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name='stock_movements',
        verbose_name="商品"
    )
    order = models.ForeignKey(
        'orders.Order',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='stock_movements',
        verbose_name="订单"
    )
    quantity_change = models.IntegerField(verbose_name="数量变化")
    reason = models.CharField(max_length=20, choices=ReasonChoices.choices, verbose_name="变动原因")
    created_at = models.DateTimeField(auto_now_add=True, verbose_name="创建时间")

    class Meta:
        db_table = 'stock_movements'
        verbose_name = "库存变动"
        verbose_name_plural = "库存变动"
        indexes = [
            models.Index(fields=['product', 'created_at'], name='idx_stock_product_created'),
        ]
