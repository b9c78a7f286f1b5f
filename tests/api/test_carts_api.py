"""购物车和收藏接口测试"""
import uuid

import pytest

from carts.infrastructure.models.cart_models import Cart, CartItem, Favorite

pytestmark = pytest.mark.django_db


def add_to_cart(client, product, quantity=1):
    return client.post('/api/cart/add', {'productId': str(product.id), 'quantity': quantity}, format='json')


# ==================== 购物车 ====================

def test_anonymous_cart_is_empty(api_client):
    response = api_client.get('/api/cart/fetch')

    assert response.status_code == 200
    assert response.json()['data'] == {'items': [], 'count': 0}


def test_adding_to_cart_requires_login(api_client, product):
    assert add_to_cart(api_client, product).status_code == 401


def test_add_creates_cart_and_snapshots_price(user_client, user, product):
    response = add_to_cart(user_client, product, 2)

    assert response.status_code == 200
    item = response.json()['data']
    assert item['quantity'] == 2
    assert item['price_at_time'] == "100.00"
    assert item['product']['name'] == product.name
    assert Cart.objects.get(user=user).items.count() == 1


def test_adding_same_product_accumulates(user_client, user, product):
    add_to_cart(user_client, product, 2)
    response = add_to_cart(user_client, product, 3)

    assert response.json()['data']['quantity'] == 5
    assert CartItem.objects.get(cart__user=user).quantity == 5


def test_add_beyond_stock_is_rejected(user_client, user, product):
    add_to_cart(user_client, product, 8)
    response = add_to_cart(user_client, product, 3)

    assert response.status_code == 400
    assert response.json()['code'] == 41001
    assert CartItem.objects.get(cart__user=user).quantity == 8


def test_add_inactive_or_missing_product(user_client, make_product):
    inactive = make_product(status="inactive")

    assert add_to_cart(user_client, inactive).status_code == 400
    missing = user_client.post('/api/cart/add', {'productId': str(uuid.uuid4())}, format='json')
    assert missing.status_code == 404


def test_fetch_lists_all_items(user_client, make_product):
    first = make_product(name="Cable")
    second = make_product(name="Charger")
    add_to_cart(user_client, first)
    add_to_cart(user_client, second)

    data = user_client.get('/api/cart/fetch').json()['data']

    assert data['count'] == 2
    assert {item['product']['name'] for item in data['items']} == {"Charger", "Cable"}


def test_update_quantity(user_client, product):
    item_id = add_to_cart(user_client, product).json()['data']['id']

    response = user_client.patch('/api/cart/update', {'itemId': item_id, 'quantity': 4}, format='json')

    assert response.status_code == 200
    assert CartItem.objects.get(id=item_id).quantity == 4

    too_many = user_client.patch('/api/cart/update', {'itemId': item_id, 'quantity': 11}, format='json')
    assert too_many.status_code == 400
    zero = user_client.patch('/api/cart/update', {'itemId': item_id, 'quantity': 0}, format='json')
    assert zero.status_code == 400


def test_update_someone_elses_item_is_404(user_client, other_user, product):
    other_client_item = CartItem.objects.create(
        cart=Cart.objects.create(user=other_user),
        product=product,
        quantity=1,
        price_at_time=product.price,
    )
    add_to_cart(user_client, product)

    response = user_client.patch('/api/cart/update', {'itemId': str(other_client_item.id), 'quantity': 2}, format='json')

    assert response.status_code == 404
    other_client_item.refresh_from_db()
    assert other_client_item.quantity == 1


def test_remove_item(user_client, product):
    item_id = add_to_cart(user_client, product).json()['data']['id']

    response = user_client.post('/api/cart/remove', {'itemId': item_id}, format='json')

    assert response.json()['data'] == {'deleted': 1}
    assert not CartItem.objects.exists()
    again = user_client.post('/api/cart/remove', {'itemId': item_id}, format='json')
    assert again.json()['data'] == {'deleted': 0}


# ==================== 收藏 ====================

def test_favorites_flow(user_client, user, product):
    added = user_client.post('/api/favorites/add', {'productId': str(product.id)}, format='json')
    assert added.status_code == 201

    duplicate = user_client.post('/api/favorites/add', {'productId': str(product.id)}, format='json')
    assert duplicate.status_code == 409

    listed = user_client.get('/api/favorites/fetch').json()['data']
    assert listed['count'] == 1
    assert listed['items'][0]['product']['id'] == str(product.id)

    removed = user_client.post('/api/favorites/remove', {'productId': str(product.id)}, format='json')
    assert removed.json()['data'] == {'deleted': 1}
    assert not Favorite.objects.filter(user=user).exists()


def test_favorite_unknown_product_is_404(user_client):
    response = user_client.post('/api/favorites/add', {'productId': str(uuid.uuid4())}, format='json')

    assert response.status_code == 404


def test_anonymous_favorites_are_empty(api_client):
    assert api_client.get('/api/favorites/fetch').json()['data'] == {'items': [], 'count': 0}
