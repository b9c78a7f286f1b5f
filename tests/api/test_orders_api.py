"""结算、下单、订单和评价接口测试"""
import uuid
from decimal import Decimal

import pytest

from accounts.infrastructure.models.account_models import PaymentCard
from carts.infrastructure.models.cart_models import Cart, CartItem
from core.infrastructure.cache import reset_cache_service
from orders.infrastructure.models.order_models import Order, PromoCode, PromoRedemption
from orders.infrastructure.repositories.django_promo_repository import DjangoPromoCodeRepository
from products.infrastructure.models.product_models import ProductReview, StockMovement

pytestmark = pytest.mark.django_db


@pytest.fixture
def mouse(make_product, category):
    return make_product(name="Gaming Mouse", price="100.00", stock=10, category=category)


@pytest.fixture
def keyboard(make_product, category):
    return make_product(name="Mechanical Keyboard", price="450.00", stock=5, category=category)


@pytest.fixture
def promo(db):
    return PromoCode.objects.create(
        code="hemat10",
        discount_type="percentage",
        discount_value=Decimal("10"),
        max_discount=Decimal("50"),
    )


def order_payload(lines, promo_code=None, **payment):
    payload = {
        'items': [{'productId': str(product.id), 'quantity': quantity} for product, quantity in lines],
        'shipping': {
            'fullName': "Budi Santoso",
            'email': "budi@example.com",
            'phone': "08123456789",
            'address': "Jl. Merdeka 1",
            'city': "Jakarta",
            'state': "DKI Jakarta",
            'zipCode': "10110",
        },
        'payment': {'method': "card", 'provider': "stripe", 'transactionId': "txn_123", **payment},
    }
    if promo_code:
        payload['promoCode'] = promo_code
    return payload


# ==================== 促销码与报价 ====================

def test_apply_promo_returns_discount(user_client, promo):
    response = user_client.post('/api/promos/apply', {'code': " hemat10 ", 'subtotal': "200.00"}, format='json')

    assert response.status_code == 200
    assert response.json()['data'] == {
        'promoId': str(promo.id),
        'code': "HEMAT10",
        'discount': "20.00",
        'finalSubtotal': "180.00",
    }
    assert not PromoRedemption.objects.exists()


def test_apply_unknown_or_inactive_promo_is_404(user_client, promo):
    promo.is_active = False
    promo.save()

    assert user_client.post('/api/promos/apply', {'code': "HEMAT10", 'subtotal': "200"}, format='json').status_code == 404
    assert user_client.post('/api/promos/apply', {'code': "NOPE", 'subtotal': "200"}, format='json').status_code == 404


def test_apply_promo_below_minimum(user_client, promo):
    promo.min_order_amount = Decimal("300")
    promo.save()

    response = user_client.post('/api/promos/apply', {'code': "HEMAT10", 'subtotal': "200"}, format='json')

    assert response.status_code == 400
    assert "300.00" in response.json()['message']


def test_quote_uses_current_prices(user_client, mouse):
    response = user_client.post('/api/checkout/quote', {
        'items': [{'productId': str(mouse.id), 'quantity': 1}],
    }, format='json')

    data = response.json()['data']
    assert data['subtotal'] == "100.00"
    assert data['shippingCost'] == "15.00"
    assert data['tax'] == "10.00"
    assert data['total'] == "125.00"
    assert data['promoCode'] is None
    assert data['items'] == [{
        'productId': str(mouse.id),
        'name': "Gaming Mouse",
        'unitPrice': "100.00",
        'quantity': 1,
        'lineTotal': "100.00",
    }]


def test_quote_merges_duplicate_lines_and_applies_promo(user_client, mouse, keyboard, promo):
    response = user_client.post('/api/checkout/quote', {
        'items': [
            {'productId': str(mouse.id), 'quantity': 1},
            {'productId': str(keyboard.id), 'quantity': 1},
            {'productId': str(mouse.id), 'quantity': 1},
        ],
        'promoCode': "hemat10",
    }, format='json')

    data = response.json()['data']
    assert data['subtotal'] == "650.00"
    assert data['discount'] == "50.00"
    assert data['shippingCost'] == "0.00"
    assert data['total'] == "660.00"
    assert data['promoCode'] == "HEMAT10"
    assert [item['quantity'] for item in data['items']] == [2, 1]


def test_quote_requires_items(user_client):
    response = user_client.post('/api/checkout/quote', {'items': []}, format='json')

    assert response.status_code == 400


# ==================== 下单 ====================

def test_place_order_end_to_end(user_client, user, mouse, keyboard, make_product, promo):
    cable = make_product(name="Cable", price="5.00")
    for product in (mouse, keyboard, cable):
        user_client.post('/api/cart/add', {'productId': str(product.id)}, format='json')

    response = user_client.post('/api/orders', order_payload(
        [(mouse, 2), (keyboard, 1)],
        promo_code="HEMAT10",
        cardNumber="4111 1111 1111 1111",
        cardName="BUDI SANTOSO",
        expiryMonth=12,
        expiryYear=2030,
    ), format='json')

    assert response.status_code == 201
    result = response.json()['data']
    assert result['total'] == "660.00"

    order = Order.objects.get(id=result['order_id'])
    assert order.status == "paid"
    assert (order.subtotal, order.discount, order.shipping_cost, order.tax) == (
        Decimal("650.00"), Decimal("50.00"), Decimal("0.00"), Decimal("60.00"),
    )
    assert order.items.count() == 2
    assert order.shipping.country == "INDONESIA"
    assert order.shipping.shipping_method == "STANDARD"

    mouse.refresh_from_db()
    keyboard.refresh_from_db()
    assert (mouse.stock, mouse.sales) == (8, 2)
    assert (keyboard.stock, keyboard.sales) == (4, 1)
    movements = StockMovement.objects.filter(order=order, reason="order")
    assert sorted(movement.quantity_change for movement in movements) == [-2, -1]

    promo.refresh_from_db()
    assert promo.used_count == 1
    assert PromoRedemption.objects.filter(promo=promo, user=user, order=order).exists()

    remaining = CartItem.objects.filter(cart=Cart.objects.get(user=user))
    assert [item.product_id for item in remaining] == [cable.id]

    card = PaymentCard.objects.get(user=user)
    assert (card.card_brand, card.last4, card.is_default) == ("Visa", "1111", True)
    assert order.payment_record.payment_card_id == card.id


def test_same_card_is_not_saved_twice(user_client, user, mouse):
    for _ in range(2):
        user_client.post('/api/orders', order_payload(
            [(mouse, 1)], cardNumber="4111111111111111", cardName="BUDI",
        ), format='json')

    assert PaymentCard.objects.filter(user=user).count() == 1
    assert Order.objects.filter(user=user).count() == 2


def test_promo_can_only_be_used_once_per_user(user_client, mouse, promo):
    first = user_client.post('/api/orders', order_payload([(mouse, 1)], promo_code="HEMAT10"), format='json')
    assert first.status_code == 201

    second = user_client.post('/api/orders', order_payload([(mouse, 1)], promo_code="HEMAT10"), format='json')

    assert second.status_code == 400
    assert Order.objects.count() == 1
    mouse.refresh_from_db()
    assert mouse.stock == 9


def test_concurrent_promo_redemption_is_rejected(user_client, user, mouse, promo, make_order, monkeypatch):
    # 另一笔并发订单已写入使用记录，但本次检查时尚未可见
    earlier = make_order(user, [(mouse, 1, "100.00")], status="paid")
    PromoRedemption.objects.create(promo=promo, user=user, order=earlier)
    monkeypatch.setattr(DjangoPromoCodeRepository, "has_redeemed", lambda self, promo_id, user_id: False)

    response = user_client.post('/api/orders', order_payload([(mouse, 1)], promo_code="HEMAT10"), format='json')

    assert response.status_code == 400
    assert response.json()['data'] == {'rule': "promo_already_redeemed"}
    assert Order.objects.count() == 1
    mouse.refresh_from_db()
    assert mouse.stock == 10
    promo.refresh_from_db()
    assert promo.used_count == 0


def test_insufficient_stock_rolls_back(user_client, mouse, keyboard):
    response = user_client.post('/api/orders', order_payload([(mouse, 1), (keyboard, 6)]), format='json')

    assert response.status_code == 400
    assert response.json()['code'] == 41001
    assert not Order.objects.exists()
    assert not StockMovement.objects.exists()
    mouse.refresh_from_db()
    assert mouse.stock == 10


def test_inactive_or_missing_product_cannot_be_ordered(user_client, make_product):
    inactive = make_product(status="inactive")
    assert user_client.post('/api/orders', order_payload([(inactive, 1)]), format='json').status_code == 400

    missing = order_payload([])
    missing['items'] = [{'productId': str(uuid.uuid4()), 'quantity': 1}]
    assert user_client.post('/api/orders', missing, format='json').status_code == 404


def test_order_requires_shipping_fields(user_client, mouse):
    payload = order_payload([(mouse, 1)])
    del payload['shipping']['zipCode']

    response = user_client.post('/api/orders', payload, format='json')

    assert response.status_code == 400
    assert 'shipping' in response.json()['data']


# ==================== 我的订单 ====================

def test_user_sees_only_own_orders(user_client, user, other_user, mouse, make_order):
    mine = make_order(user, [(mouse, 1, "100.00")], status="paid")
    theirs = make_order(other_user, [(mouse, 1, "100.00")], status="paid")

    listed = user_client.get('/api/orders/list').json()['data']
    assert [order['id'] for order in listed] == [str(mine.id)]

    detail = user_client.get(f'/api/orders/{mine.id}')
    assert detail.status_code == 200
    assert detail.json()['data']['items'][0]['product']['name'] == "Gaming Mouse"
    assert 'payment_detail' in detail.json()['data']

    assert user_client.get(f'/api/orders/{theirs.id}').status_code == 404


def test_complete_delivered_order(user_client, user, mouse, make_order):
    order = make_order(user, [(mouse, 1, "100.00")], status="delivered")

    response = user_client.patch('/api/orders/complete', {'order_id': str(order.id)}, format='json')

    assert response.status_code == 200
    data = response.json()['data']
    assert data['success'] is True
    assert data['order']['status'] == "completed"
    order.refresh_from_db()
    assert order.status == "completed"


def test_cannot_complete_order_before_delivery(user_client, user, mouse, make_order):
    order = make_order(user, [(mouse, 1, "100.00")], status="shipped")

    response = user_client.patch('/api/orders/complete', {'order_id': str(order.id)}, format='json')

    assert response.status_code == 400
    assert response.json()['code'] == 41103


# ==================== 评价 ====================

def review(client, order, product, rating=5, text="Mantap"):
    return client.post('/api/reviews', {
        'order_id': str(order.id),
        'product_id': str(product.id),
        'rating': rating,
        'review': text,
    }, format='json')


def test_review_updates_product_rating(user_client, other_user, user, mouse, make_order):
    earlier = make_order(other_user, [(mouse, 1, "100.00")])
    ProductReview.objects.create(user=other_user, order=earlier, product=mouse, rating=4)
    order = make_order(user, [(mouse, 1, "100.00")])

    response = review(user_client, order, mouse, rating=5)

    assert response.status_code == 201
    mouse.refresh_from_db()
    assert mouse.rating == Decimal("4.5")

    assert review(user_client, order, mouse).status_code == 409


def test_review_rules(user_client, user, other_user, mouse, keyboard, make_order):
    pending = make_order(user, [(mouse, 1, "100.00")], status="paid")
    completed = make_order(user, [(mouse, 1, "100.00")])
    theirs = make_order(other_user, [(mouse, 1, "100.00")])

    assert review(user_client, pending, mouse).status_code == 400
    assert review(user_client, completed, keyboard).status_code == 400
    assert review(user_client, theirs, mouse).status_code == 403
    assert review(user_client, completed, mouse, rating=6).status_code == 400
    assert not ProductReview.objects.exists()


def test_review_refreshes_cached_product_detail(settings, api_client, user_client, user, mouse, make_order):
    settings.CACHE_BACKEND = "memory"
    settings.PRODUCT_SETTINGS = {**settings.PRODUCT_SETTINGS, 'CACHE_TIMEOUT': 60}
    reset_cache_service()
    order = make_order(user, [(mouse, 1, "100.00")])

    assert api_client.get(f'/api/products/{mouse.id}').json()['data']['rating'] == 0.0

    assert review(user_client, order, mouse, rating=5).status_code == 201

    assert api_client.get(f'/api/products/{mouse.id}').json()['data']['rating'] == 5.0


# ==================== 后台订单管理 ====================

def test_admin_filters_orders(admin_api_client, user, other_user, mouse, make_order):
    make_order(user, [(mouse, 1, "100.00")], status="paid")
    make_order(other_user, [(mouse, 2, "100.00")], status="shipped")

    by_status = admin_api_client.get('/api/admin/orders', {'status': "shipped"}).json()['data']
    assert [order['user']['email'] for order in by_status['items']] == [other_user.email]

    by_email = admin_api_client.get('/api/admin/orders', {'search': "budi"}).json()['data']
    assert by_email['pagination']['total'] == 1
    assert by_email['items'][0]['user']['fullname'] == "Budi Santoso"


def test_admin_updates_status(admin_api_client, user, mouse, make_order):
    order = make_order(user, [(mouse, 1, "100.00")], status="paid")

    response = admin_api_client.put(f'/api/admin/orders/{order.id}/status', {'status': "shipped"}, format='json')

    assert response.status_code == 200
    order.refresh_from_db()
    assert order.status == "shipped"

    invalid = admin_api_client.put(f'/api/admin/orders/{order.id}/status', {'status': "lost"}, format='json')
    assert invalid.status_code == 400
    missing = admin_api_client.put(f'/api/admin/orders/{uuid.uuid4()}/status', {'status': "paid"}, format='json')
    assert missing.status_code == 404


def test_order_admin_requires_admin_role(user_client):
    assert user_client.get('/api/admin/orders').status_code == 403
