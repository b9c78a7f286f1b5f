"""
账户基础设施层数据库模型。
定义用户、支付卡和访问日志的Django ORM模型。
"""
import uuid
from django.conf import settings
from django.contrib.auth.base_user import AbstractBaseUser, BaseUserManager
from django.db import models
from django.utils import timezone


class UserManager(BaseUserManager):
    """用户模型管理器，以邮箱作为登录名"""

    use_in_migrations = True

    def _create_user(self, email, password, **extra_fields):
        if not email:
            raise ValueError("邮箱不能为空")
        email = self.normalize_email(email).lower()
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault('role', User.RoleChoices.MEMBER)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields['role'] = User.RoleChoices.ADMIN
        return self._create_user(email, password, **extra_fields)


class User(AbstractBaseUser):
    """用户数据库模型"""

    class RoleChoices(models.TextChoices):
        ADMIN = 'admin', '管理员'
        MEMBER = 'member', '会员'

    class TypeChoices(models.TextChoices):
        MANUAL = 'manual', '邮箱注册'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True, verbose_name="邮箱")
    fullname = models.CharField(max_length=100, blank=True, verbose_name="姓名")
    role = models.CharField(
        max_length=20,
        choices=RoleChoices.choices,
        default=RoleChoices.MEMBER,
        verbose_name="角色"
    )
    type = models.CharField(
        max_length=20,
        choices=TypeChoices.choices,
        default=TypeChoices.MANUAL,
        verbose_name="注册来源"
    )
    image = models.CharField(max_length=255, blank=True, default="", verbose_name="头像")
    phone_number = models.CharField(max_length=30, blank=True, default="", verbose_name="电话")
    address = models.TextField(blank=True, default="", verbose_name="地址")
    bio = models.TextField(blank=True, default="", verbose_name="个人简介")
    reset_token = models.CharField(max_length=64, null=True, blank=True, verbose_name="重置令牌摘要")
    reset_token_expires = models.DateTimeField(null=True, blank=True, verbose_name="重置令牌过期时间")
    is_active = models.BooleanField(default=True, verbose_name="是否启用")
    date_joined = models.DateTimeField(default=timezone.now, verbose_name="注册时间")

    objects = UserManager()

    USERNAME_FIELD = 'email'
    EMAIL_FIELD = 'email'
    REQUIRED_FIELDS = ['fullname']

    class Meta:
        db_table = 'users'
        verbose_name = "用户"
        verbose_name_plural = "用户"
        indexes = [
            models.Index(fields=['role'], name='idx_user_role'),
            models.Index(fields=['reset_token'], name='idx_user_reset_token'),
        ]

    def __str__(self):
        return self.email


class PaymentCard(models.Model):
    """支付卡数据库模型"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='payment_cards',
        verbose_name="用户"
    )
    card_brand = models.CharField(max_length=30, verbose_name="卡组织")
    cardholder_name = models.CharField(max_length=100, blank=True, verbose_name="持卡人")
    last4 = models.CharField(max_length=4, verbose_name="卡号后四位")
    fingerprint = models.CharField(max_length=64, verbose_name="卡号指纹")
    expiry_month = models.PositiveSmallIntegerField(null=True, blank=True, verbose_name="有效期月")
    expiry_year = models.PositiveSmallIntegerField(null=True, blank=True, verbose_name="有效期年")
    is_default = models.BooleanField(default=False, verbose_name="是否默认")
    created_at = models.DateTimeField(auto_now_add=True, verbose_name="创建时间")

    class Meta:
        db_table = 'payment_cards'
        verbose_name = "支付卡"
        verbose_name_plural = "支付卡"
        indexes = [
            models.Index(fields=['user', 'is_default'], name='idx_card_user_default'),
            models.Index(fields=['user', 'fingerprint'], name='idx_card_user_fingerprint'),
        ]

    def __str__(self):
        return f"{self.card_brand} **** {self.last4}"


class UserVisit(models.Model):
    """访问日志数据库模型"""
    id = models.BigAutoField(primary_key=True)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='visits',
        verbose_name="用户"
    )
    ip = models.GenericIPAddressField(null=True, blank=True, verbose_name="IP地址")
    user_agent = models.TextField(blank=True, default="", verbose_name="User-Agent")
    url = models.CharField(max_length=500, blank=True, default="", verbose_name="访问地址")
    timestamp = models.DateTimeField(default=timezone.now, verbose_name="访问时间")

    class Meta:
        db_table = 'user_visits'
        verbose_name = "访问日志"
        verbose_name_plural = "访问日志"
        indexes = [
            models.Index(fields=['timestamp'], name='idx_visit_timestamp'),
        ]
