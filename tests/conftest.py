"""
测试公共夹具。
测试使用 storefront.config.testing 配置：内存SQLite、关闭缓存、邮件写入内存。
"""
from datetime import timedelta
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.test import APIClient

from core.infrastructure.cache import reset_cache_service
from orders.infrastructure.models.order_models import Order, OrderItem
from products.infrastructure.models.product_models import Category, Product

PASSWORD = "s3cret-pass"


@pytest.fixture(autouse=True)
def fresh_cache_service():
    """每个测试按当前配置重新创建缓存服务"""
    reset_cache_service()
    yield
    reset_cache_service()


@pytest.fixture
def password() -> str:
    return PASSWORD


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def user(db):
    return get_user_model().objects.create_user(
        email="budi@example.com",
        password=PASSWORD,
        fullname="Budi Santoso",
    )


@pytest.fixture
def other_user(db):
    return get_user_model().objects.create_user(
        email="sari@example.com",
        password=PASSWORD,
        fullname="Sari Dewi",
    )


@pytest.fixture
def admin(db):
    return get_user_model().objects.create_superuser(
        email="admin@example.com",
        password=PASSWORD,
        fullname="Admin Toko",
    )


@pytest.fixture
def user_client(user) -> APIClient:
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def admin_api_client(admin) -> APIClient:
    client = APIClient()
    client.force_authenticate(user=admin)
    return client


@pytest.fixture
def category(db):
    return Category.objects.create(name="Electronics", slug="electronics")


@pytest.fixture
def make_product(db):
    """创建商品的工厂夹具"""

    def _make(name="Wireless Mouse", price="100.00", stock=10, category=None, status="active", **extra):
        return Product.objects.create(
            name=name,
            price=Decimal(price),
            stock=stock,
            category=category,
            status=status,
            **extra
        )

    return _make


@pytest.fixture
def product(make_product, category):
    return make_product(category=category)


@pytest.fixture
def make_order(db):
    """
    直接通过ORM创建订单，用于报表和订单状态测试。
    lines 为 (商品, 数量, 单价) 列表，days_ago 控制下单时间。
    """

    def _make(user, lines, status="completed", days_ago=0, created_at=None):
        subtotal = sum((Decimal(price) * quantity for _, quantity, price in lines), Decimal("0"))
        order = Order.objects.create(
            user=user,
            status=status,
            subtotal=subtotal,
            total=subtotal,
            payment="card",
            created_at=created_at or timezone.now() - timedelta(days=days_ago),
        )
        for item_product, quantity, price in lines:
            OrderItem.objects.create(
                order=order,
                product=item_product,
                product_name=item_product.name,
                quantity=quantity,
                price_at_time=Decimal(price),
            )
        return order

    return _make
