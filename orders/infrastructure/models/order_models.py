"""
订单基础设施层数据库模型。
定义订单、订单商品、收货信息、支付记录、促销码及其使用记录的Django ORM模型。
"""
import uuid
from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone


class PromoCode(models.Model):
    """促销码数据库模型"""

    class DiscountTypeChoices(models.TextChoices):
        PERCENTAGE = 'percentage', '百分比'
        FIXED = 'fixed', '固定金额'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    code = models.CharField(max_length=50, unique=True, verbose_name="促销码")
    description = models.CharField(max_length=255, blank=True, default="", verbose_name="描述")
    discount_type = models.CharField(
        max_length=20,
        choices=DiscountTypeChoices.choices,
        default=DiscountTypeChoices.PERCENTAGE,
        verbose_name="折扣类型"
    )
    discount_value = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(0)],
        verbose_name="折扣值"
    )
    min_order_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0"),
        verbose_name="最低订单金额"
    )
    max_discount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        verbose_name="最高优惠金额"
    )
    usage_limit = models.PositiveIntegerField(null=True, blank=True, verbose_name="使用次数上限")
    used_count = models.PositiveIntegerField(default=0, verbose_name="已使用次数")
    start_at = models.DateTimeField(null=True, blank=True, verbose_name="开始时间")
    expires_at = models.DateTimeField(null=True, blank=True, verbose_name="过期时间")
    is_active = models.BooleanField(default=True, verbose_name="是否启用")
    created_at = models.DateTimeField(auto_now_add=True, verbose_name="创建时间")

    class Meta:
        db_table = 'promo_codes'
        verbose_name = "促销码"
        verbose_name_plural = "促销码"

    def save(self, *args, **kwargs):
        self.code = self.code.strip().upper()
        super().save(*args, **kwargs)

    def __str__(self):
        return self.code


class Order(models.Model):
    """订单数据库模型"""

    class StatusChoices(models.TextChoices):
        PAID = 'paid', '已支付'
        PENDING = 'pending', '待处理'
        PROCESSING = 'processing', '处理中'
        SHIPPED = 'shipped', '已发货'
        DELIVERED = 'delivered', '已送达'
        COMPLETED = 'completed', '已完成'
        CANCELLED = 'cancelled', '已取消'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='orders',
        verbose_name="用户"
    )
    status = models.CharField(
        max_length=20,
        choices=StatusChoices.choices,
        default=StatusChoices.PAID,
        verbose_name="订单状态"
    )
    subtotal = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0"), verbose_name="商品小计")
    discount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0"), verbose_name="优惠金额")
    shipping_cost = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0"), verbose_name="运费")
    tax = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0"), verbose_name="税费")
    total = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0"), verbose_name="订单总额")
    payment = models.CharField(max_length=50, blank=True, default="", verbose_name="支付方式")
    promo_code = models.ForeignKey(
        PromoCode,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='orders',
        verbose_name="促销码"
    )
    created_at = models.DateTimeField(default=timezone.now, verbose_name="下单时间")
    updated_at = models.DateTimeField(auto_now=True, verbose_name="更新时间")

    class Meta:
        db_table = 'orders'
        verbose_name = "订单"
        verbose_name_plural = "订单"
        indexes = [
            models.Index(fields=['user', 'created_at'], name='idx_order_user_created'),
            models.Index(fields=['status', 'created_at'], name='idx_order_status_created'),
        ]


class OrderItem(models.Model):
    """订单商品数据库模型"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name='items',
        verbose_name="订单"
    )
    product = models.ForeignKey(
        'products.Product',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='order_items',
        verbose_name="商品"
    )
    # 商品删除后报表仍使用下单时的名称
    product_name = models.CharField(max_length=200, blank=True, default="", verbose_name="商品名称")
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)], verbose_name="数量")
    price_at_time = models.DecimalField(max_digits=12, decimal_places=2, verbose_name="下单时单价")

    class Meta:
        db_table = 'order_items'
        verbose_name = "订单商品"
        verbose_name_plural = "订单商品"


class OrderShipping(models.Model):
    """订单收货信息数据库模型"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.OneToOneField(
        Order,
        on_delete=models.CASCADE,
        related_name='shipping',
        verbose_name="订单"
    )
    full_name = models.CharField(max_length=100, verbose_name="收货人")
    email = models.EmailField(verbose_name="邮箱")
    phone_number = models.CharField(max_length=30, blank=True, default="", verbose_name="电话")
    home_address = models.CharField(max_length=255, verbose_name="地址")
    city = models.CharField(max_length=100, verbose_name="城市")
    state = models.CharField(max_length=100, verbose_name="省/州")
    zip_code = models.CharField(max_length=20, verbose_name="邮编")
    country = models.CharField(max_length=100, default='INDONESIA', verbose_name="国家")
    shipping_method = models.CharField(max_length=30, default='STANDARD', verbose_name="配送方式")
    shipping_cost = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0"), verbose_name="运费")

    class Meta:
        db_table = 'order_shipping'
        verbose_name = "订单收货信息"
        verbose_name_plural = "订单收货信息"


class OrderPayment(models.Model):
    """订单支付记录数据库模型"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.OneToOneField(
        Order,
        on_delete=models.CASCADE,
        related_name='payment_record',
        verbose_name="订单"
    )
    payment_method = models.CharField(max_length=50, verbose_name="支付方式")
    payment_provider = models.CharField(max_length=50, blank=True, default="", verbose_name="支付渠道")
    transaction_id = models.CharField(max_length=100, blank=True, default="", verbose_name="交易号")
    payment_card = models.ForeignKey(
        'accounts.PaymentCard',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='order_payments',
        verbose_name="支付卡"
    )
    status = models.CharField(max_length=20, default='PAID', verbose_name="支付状态")
    paid_at = models.DateTimeField(null=True, blank=True, verbose_name="支付时间")

    class Meta:
        db_table = 'order_payments'
        verbose_name = "订单支付记录"
        verbose_name_plural = "订单支付记录"


class PromoRedemption(models.Model):
    """促销码使用记录数据库模型，每个用户每个促销码只能使用一次"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    promo = models.ForeignKey(
        PromoCode,
        on_delete=models.CASCADE,
        related_name='redemptions',
        verbose_name="促销码"
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='promo_redemptions',
        verbose_name="用户"
    )
    order = models.ForeignKey(
        Order,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='promo_redemptions',
        verbose_name="订单"
    )
    redeemed_at = models.DateTimeField(auto_now_add=True, verbose_name="使用时间")

    class Meta:
        db_table = 'promo_redemptions'
        verbose_name = "促销码使用记录"
        verbose_name_plural = "促销码使用记录"
        constraints = [
            models.UniqueConstraint(fields=['promo', 'user'], name='uniq_redemption_promo_user'),
        ]
