"""商品目录接口测试"""
import uuid
from datetime import timedelta

import pytest
from django.utils import timezone

from core.infrastructure.cache import reset_cache_service
from products.infrastructure.models.product_models import Category, Product, StockMovement

pytestmark = pytest.mark.django_db


@pytest.fixture
def catalog(make_product, category):
    """三个电子产品和一个未分类的下架商品，按上架时间从新到旧"""
    now = timezone.now()
    return [
        make_product(name="Gaming Mouse", price="120.00", category=category, date_added=now),
        make_product(name="Mechanical Keyboard", price="450.00", category=category, date_added=now - timedelta(days=1)),
        make_product(name="Mouse Pad", price="15.50", category=category, date_added=now - timedelta(days=2)),
        make_product(name="Old Mouse", price="5.00", status="inactive", date_added=now - timedelta(days=3)),
    ]


# ==================== 前台 ====================

def test_search_by_keyword_is_case_insensitive(api_client, catalog):
    response = api_client.get('/api/products/search', {'search': "mouse"})

    assert response.status_code == 200
    data = response.json()['data']
    assert [item['name'] for item in data['items']] == ["Gaming Mouse", "Mouse Pad", "Old Mouse"]
    assert data['pagination']['total'] == 3


def test_search_filters_by_status_and_category(api_client, catalog):
    response = api_client.get('/api/products/search', {'status': "active", 'category': "electronics"})

    names = [item['name'] for item in response.json()['data']['items']]
    assert names == ["Gaming Mouse", "Mechanical Keyboard", "Mouse Pad"]


def test_search_paginates(api_client, catalog):
    response = api_client.get('/api/products/search', {'page': 2, 'limit': 3})

    data = response.json()['data']
    assert [item['name'] for item in data['items']] == ["Old Mouse"]
    assert data['pagination'] == {'total': 4, 'page': 2, 'pageSize': 3, 'hasMore': False}


def test_product_detail(api_client, product):
    response = api_client.get(f'/api/products/{product.id}')

    assert response.status_code == 200
    data = response.json()['data']
    assert data['name'] == product.name
    assert data['price'] == "100.00"
    assert data['category'] == "electronics"
    assert data['category_name'] == "Electronics"


def test_product_detail_is_cached_until_admin_update(settings, api_client, admin_api_client, product):
    settings.CACHE_BACKEND = "memory"
    settings.PRODUCT_SETTINGS = {**settings.PRODUCT_SETTINGS, 'CACHE_TIMEOUT': 60}
    reset_cache_service()

    assert api_client.get(f'/api/products/{product.id}').json()['data']['name'] == "Wireless Mouse"
    Product.objects.filter(pk=product.pk).update(name="Renamed Elsewhere")
    assert api_client.get(f'/api/products/{product.id}').json()['data']['name'] == "Wireless Mouse"

    admin_api_client.put(f'/api/admin/products/{product.id}', {
        'name': "Wireless Mouse Pro", 'price': "110.00", 'stock': product.stock,
    }, format='json')

    data = api_client.get(f'/api/products/{product.id}').json()['data']
    assert (data['name'], data['price']) == ("Wireless Mouse Pro", "110.00")


@pytest.mark.parametrize("product_id", [uuid.uuid4(), "not-a-uuid"])
def test_unknown_product_is_404(api_client, product_id):
    response = api_client.get(f'/api/products/{product_id}')

    assert response.status_code == 404
    assert response.json()['success'] is False


def test_categories_include_product_count(api_client, catalog):
    Category.objects.create(name="Books", slug="books")

    response = api_client.get('/api/categories/fetch')

    counts = {item['slug']: item['product_count'] for item in response.json()['data']}
    assert counts == {'books': 0, 'electronics': 3}


def test_category_detail_lists_products(api_client, catalog):
    response = api_client.get('/api/categories/electronics')

    data = response.json()['data']
    assert data['slug'] == "electronics"
    assert [item['name'] for item in data['products']] == ["Gaming Mouse", "Mechanical Keyboard", "Mouse Pad"]


def test_unknown_category_is_404(api_client):
    assert api_client.get('/api/categories/garden').status_code == 404


# ==================== 后台 ====================

def test_admin_creates_product_with_initial_stock(admin_api_client, category):
    response = admin_api_client.post('/api/admin/products', {
        'name': "USB-C Hub",
        'price': "35.00",
        'stock': 12,
        'category': "electronics",
        'specification': {'ports': 6},
    }, format='json')

    assert response.status_code == 201
    data = response.json()['data']
    assert data['status'] == "active"
    assert data['specification'] == {'ports': 6}
    movement = StockMovement.objects.get(product_id=data['id'])
    assert (movement.quantity_change, movement.reason) == (12, "initial")


def test_admin_create_with_unknown_category_is_404(admin_api_client):
    response = admin_api_client.post('/api/admin/products', {
        'name': "USB-C Hub", 'price': "35.00", 'category': "garden",
    }, format='json')

    assert response.status_code == 404
    assert not Product.objects.exists()


def test_admin_create_rejects_negative_price(admin_api_client):
    response = admin_api_client.post('/api/admin/products', {'name': "Broken", 'price': "-1"}, format='json')

    assert response.status_code == 400


def test_admin_update_records_stock_adjustment(admin_api_client, product):
    response = admin_api_client.put(f'/api/admin/products/{product.id}', {
        'name': "Wireless Mouse Pro",
        'price': "110.00",
        'stock': 7,
    }, format='json')

    assert response.status_code == 200
    product.refresh_from_db()
    assert product.name == "Wireless Mouse Pro"
    assert product.stock == 7
    movement = StockMovement.objects.get(product=product)
    assert (movement.quantity_change, movement.reason) == (-3, "adjustment")


def test_admin_update_without_stock_change_records_nothing(admin_api_client, product):
    admin_api_client.put(f'/api/admin/products/{product.id}', {
        'name': product.name, 'price': "100.00", 'stock': product.stock,
    }, format='json')

    assert not StockMovement.objects.exists()


def test_admin_deletes_products(admin_api_client, catalog):
    single = admin_api_client.delete(f'/api/admin/products/{catalog[0].id}')
    assert single.status_code == 200

    bulk = admin_api_client.post('/api/admin/products/bulk-delete', {
        'ids': [str(catalog[1].id), str(catalog[2].id), str(uuid.uuid4())],
    }, format='json')

    assert bulk.json()['data'] == {'deleted': 2}
    assert list(Product.objects.values_list('name', flat=True)) == ["Old Mouse"]


def test_admin_category_options(admin_api_client, category):
    response = admin_api_client.get('/api/admin/categories')

    assert response.json()['data'] == [{'id': str(category.id), 'name': "Electronics", 'slug': "electronics"}]


def test_catalog_admin_requires_admin_role(api_client, user_client):
    assert api_client.post('/api/admin/products', {}, format='json').status_code == 401
    assert user_client.post('/api/admin/products', {}, format='json').status_code == 403
